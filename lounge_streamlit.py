# lounge_streamlit.py
# Interactive lounge event planner (Streamlit)
# Run: streamlit run lounge_streamlit.py

import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st

from lounge.constants import (
    BOOST_EFFECTS,
    CUMULATIVE_COST,
    MAX_LEVEL,
    SKILL_KEYS,
    SKILL_NAMES,
    TOTAL_WEEKS,
    WEEKLY_MAX_POINTS,
)
from lounge.errors import InvalidInputError
from lounge.event import current_week
from lounge.logger import setup_logger
from lounge.planner import LoungeRequest, share_text, validation_warnings
from lounge.reward_model import session_length, total_multiplier
from lounge.scenarios import CURRENT, build_scenarios, compare_scenarios

setup_logger(level="WARNING")
st.set_page_config(page_title="Lounge Planner", layout="wide")

# -----------------------------
# Sidebar controls
# -----------------------------
st.sidebar.title("Controls")

week = st.sidebar.slider("Current week", 1, TOTAL_WEEKS, current_week(), 1)
levels = tuple(
    st.sidebar.slider(f"{SKILL_NAMES[key]} level", 0, MAX_LEVEL, 0, 1) for key in SKILL_KEYS
)
points = int(st.sidebar.number_input("Points available", min_value=0, value=WEEKLY_MAX_POINTS, step=1))
time_available = st.sidebar.number_input(
    "Hours left this week",
    min_value=0.0,
    value=float(session_length(levels[0])),
    step=0.5,
)

st.sidebar.markdown("---")
st.sidebar.subheader("Options")
use_cap = st.sidebar.checkbox("Cap Long Rest level", value=False)
max_time_level = None
if use_cap:
    # A slider needs min < max; at max level the cap is already fixed.
    max_time_level = (
        st.sidebar.slider("Long Rest max level", levels[0], MAX_LEVEL, max(levels[0], 5), 1)
        if levels[0] < MAX_LEVEL
        else MAX_LEVEL
    )

custom_grants = st.sidebar.checkbox("Custom points for later weeks", value=False)
weekly_points = None
if custom_grants and week < TOTAL_WEEKS:
    weekly_points = tuple(
        int(st.sidebar.number_input(f"Week {w} points", 0, WEEKLY_MAX_POINTS, WEEKLY_MAX_POINTS, 1))
        for w in range(week + 1, TOTAL_WEEKS + 1)
    )

request = LoungeRequest(
    current_week=week,
    levels=levels,
    points=points,
    time_available=time_available,
    weekly_points=weekly_points,
    max_time_level=max_time_level,
)

# -----------------------------
# Layout
# -----------------------------
st.title("Lounge Planner — where to put your skill points each week")
st.latex(r"exp_{hour} = m_{long}(l_0) \times m_{dynamic}(l_1) \times m_{snack}(l_2) \times boost")

try:
    warnings = validation_warnings(request)
    plans, comparisons = compare_scenarios(request)
except InvalidInputError as exc:
    st.error(str(exc))
    st.stop()

for message in warnings:
    st.warning(message)

plan = plans[CURRENT]
colors = {scenario.name: scenario.color for scenario in build_scenarios(request)}

st.write(
    f"Total exp = **{plan.total_reward:.2f}** ｜ "
    f"Sauna equivalent = **{plan.sauna_hours:.2f} h** ｜ "
    f"Lounge time = **{plan.total_time:g} h** ｜ "
    f"Current boost = **{plan.current_boost.name if plan.current_boost else 'none'}**"
)
for line in plan.recommendations:
    st.info(line)

colA, colB = st.columns([2, 1])

with colA:
    st.subheader("Weekly plan")
    st.dataframe(plan.to_frame().set_index("week").round(2), use_container_width=True)

    fig, ax = plt.subplots()
    for name, scenario_plan in plans.items():
        df = scenario_plan.to_frame()
        ax.plot(df["week"], df["exp"].cumsum(), marker="o", label=name, color=colors[name])
    ax.set_xlabel("Week")
    ax.set_ylabel("Cumulative exp")
    ax.set_title("Cumulative exp by week")
    ax.set_xlim(week - 0.2, TOTAL_WEEKS + 0.2)
    ax.legend()
    st.pyplot(fig)

with colB:
    st.subheader("Scenario comparison")
    if comparisons:
        st.dataframe(
            pd.DataFrame(
                [
                    {
                        "scenario": c.name,
                        "exp": c.total_reward,
                        "hours spent": c.total_time,
                        "exp lost": c.reward_loss,
                        "sauna h lost": c.sauna_hours_loss,
                    }
                    for c in comparisons
                ]
            ).set_index("scenario").round(2),
            use_container_width=True,
        )
    else:
        st.write("Nothing to compare: no cap and full points every week.")

    st.subheader("Current rate")
    st.write(
        pd.DataFrame(
            {
                "skill": [SKILL_NAMES[key] for key in SKILL_KEYS],
                "level": list(levels),
                "points invested": [CUMULATIVE_COST[level] for level in levels],
            }
        ).set_index("skill")
    )
    st.write(f"exp per hour: **{total_multiplier(levels):.3f}**")

    st.subheader("Boosts (best one applies)")
    st.write(
        pd.DataFrame(
            [{"boost": b.name, "x": b.multiplier, "needs": b.description} for b in BOOST_EFFECTS]
        ).set_index("boost")
    )

st.subheader("Share")
st.code(share_text(plan), language=None)

st.caption(
    "Note: Dynamic Rest and Snack Recharge apply to the whole week; "
    "Long Rest only to hours spent after the level-up."
)
