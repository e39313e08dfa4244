"""
tickbars Resampling Dashboard

Resamples a tick stream into time, tick, volume or dollar bars and charts them.
Run with: streamlit run app.py
"""
import io
import json
import logging

import streamlit as st
import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

# Import local modules
from config import (
    RESAMPLE_MODES, DEFAULT_MODE, DEFAULT_THRESHOLDS, THRESHOLD_LABELS,
    SAMPLE_TICK_COUNT, MIN_SAMPLE_TICKS, MAX_SAMPLE_TICKS,
    SAMPLE_START_PRICE, SAMPLE_SEED,
    CHART_HEIGHT, MAX_TABLE_ROWS, COLORS, LOG_LEVEL
)
from tickbars.ingestion.data_normalizer import normalize_tick, ticks_from_dataframe
from tickbars.ingestion.sample_data import demo_ticks, generate_sample_ticks
from tickbars.processing.resampler import (
    InvalidConfiguration, ResampleMode, Resampler, bars_to_dataframe
)

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# =============================================================================
# PAGE CONFIG
# =============================================================================
st.set_page_config(
    page_title="tickbars",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown(f"""
<style>
    .stApp {{
        background: {COLORS["background"]};
    }}

    .kpi-card {{
        background: {COLORS["surface"]};
        border: 1px solid rgba(255, 255, 255, 0.1);
        border-radius: 14px;
        padding: 20px 24px;
        text-align: center;
    }}

    .kpi-value {{
        font-family: 'JetBrains Mono', monospace;
        font-size: 28px;
        font-weight: 700;
        color: {COLORS["text"]};
    }}

    .kpi-label {{
        font-size: 10px;
        font-weight: 500;
        color: {COLORS["text_muted"]};
        text-transform: uppercase;
        letter-spacing: 1.5px;
        margin-bottom: 8px;
    }}
</style>
""", unsafe_allow_html=True)


# =============================================================================
# DATA LOADING FUNCTIONS
# =============================================================================
def load_ndjson_data(raw: bytes) -> list:
    """Load tick data from NDJSON bytes, skipping unparsable lines."""
    ticks = []
    for line in io.StringIO(raw.decode("utf-8")):
        if not line.strip():
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"Skipping invalid NDJSON line: {e}")
            continue
        tick = normalize_tick(record)
        if tick:
            ticks.append(tick)
    return ticks


def load_csv_data(raw: bytes) -> list:
    """Load tick data from CSV bytes with timestamp, price and volume columns."""
    df = pd.read_csv(io.BytesIO(raw))
    return ticks_from_dataframe(df)


def load_uploaded_ticks(uploaded) -> list:
    """Dispatch an uploaded file to the matching loader."""
    raw = uploaded.getvalue()
    try:
        if uploaded.name.endswith(".csv"):
            return load_csv_data(raw)
        return load_ndjson_data(raw)
    except (ValueError, UnicodeDecodeError) as e:
        st.error(f"Error loading data: {e}")
        return []


@st.cache_data
def cached_sample_ticks(n: int, seed: int) -> list:
    return generate_sample_ticks(n, start_price=SAMPLE_START_PRICE, seed=seed)


# =============================================================================
# CHART FUNCTIONS
# =============================================================================
def create_candlestick_chart(bars: pd.DataFrame, height: int = 480) -> go.Figure:
    """Create candlestick chart with a volume subplot."""
    fig = make_subplots(
        rows=2, cols=1, shared_xaxes=True,
        row_heights=[0.75, 0.25], vertical_spacing=0.03
    )
    x = pd.to_datetime(bars.index, unit="ms")

    fig.add_trace(
        go.Candlestick(
            x=x,
            open=bars["open"],
            high=bars["high"],
            low=bars["low"],
            close=bars["close"],
            increasing_line_color=COLORS["success"],
            decreasing_line_color=COLORS["error"],
            name="OHLC",
        ),
        row=1, col=1
    )
    fig.add_trace(
        go.Bar(
            x=x,
            y=bars["total_volume"],
            marker_color=COLORS["primary"],
            name="Volume",
        ),
        row=2, col=1
    )

    fig.update_layout(
        template="plotly_dark",
        paper_bgcolor=COLORS["background"],
        plot_bgcolor=COLORS["background"],
        height=height,
        margin=dict(l=60, r=60, t=40, b=40),
        showlegend=False,
        xaxis_rangeslider_visible=False,
        font=dict(color=COLORS["text"]),
    )
    fig.update_xaxes(gridcolor=COLORS["surface"], tickfont=dict(color=COLORS["text_muted"]))
    fig.update_yaxes(gridcolor=COLORS["surface"], tickfont=dict(color=COLORS["text_muted"]))

    return fig


def kpi_card(label: str, value: str) -> None:
    st.markdown(f"""
    <div class="kpi-card">
        <div class="kpi-label">{label}</div>
        <div class="kpi-value">{value}</div>
    </div>
    """, unsafe_allow_html=True)


# =============================================================================
# SIDEBAR
# =============================================================================
with st.sidebar:
    st.markdown("### Tick Source")
    source = st.radio(
        "Tick Source",
        ["Demo session", "Synthetic random walk", "Upload file"],
        label_visibility="collapsed",
    )

    ticks = []
    if source == "Demo session":
        ticks = demo_ticks()
    elif source == "Synthetic random walk":
        n_ticks = st.slider(
            "Ticks", MIN_SAMPLE_TICKS, MAX_SAMPLE_TICKS, SAMPLE_TICK_COUNT, step=100
        )
        seed = st.number_input("Seed", value=SAMPLE_SEED, step=1)
        ticks = cached_sample_ticks(n_ticks, int(seed))
    else:
        uploaded = st.file_uploader("NDJSON or CSV ticks", type=["ndjson", "jsonl", "csv"])
        if uploaded is not None:
            ticks = load_uploaded_ticks(uploaded)

    st.markdown("### Bar Type")
    mode_labels = list(RESAMPLE_MODES.keys())
    default_index = list(RESAMPLE_MODES.values()).index(DEFAULT_MODE)
    selected_label = st.radio(
        "Bar Type", mode_labels, index=default_index,
        label_visibility="collapsed", horizontal=True
    )
    selected_mode = RESAMPLE_MODES[selected_label]

    threshold = st.number_input(
        THRESHOLD_LABELS[selected_mode],
        value=DEFAULT_THRESHOLDS[selected_mode],
        key=f"threshold_{selected_mode}",
    )


# =============================================================================
# MAIN CONTENT
# =============================================================================
st.title("Tick Resampler")

bars_df = None
try:
    resampler = Resampler(ResampleMode(selected_mode), threshold)
    bars_df = bars_to_dataframe(resampler.resample(ticks))
except InvalidConfiguration as e:
    st.error(f"Invalid configuration: {e}")

if bars_df is not None:
    kpi_col1, kpi_col2, kpi_col3 = st.columns(3)
    with kpi_col1:
        kpi_card("Ticks", f"{len(ticks):,}")
    with kpi_col2:
        kpi_card("Bars", f"{len(bars_df):,}")
    with kpi_col3:
        last_close = f"{bars_df['close'].iloc[-1]:,.2f}" if not bars_df.empty else "-"
        kpi_card("Last Close", last_close)

    st.markdown("<div style='height: 24px;'></div>", unsafe_allow_html=True)

    if bars_df.empty:
        st.info("📊 No ticks to resample. Pick a tick source in the sidebar.")
    else:
        st.plotly_chart(
            create_candlestick_chart(bars_df, CHART_HEIGHT),
            use_container_width=True,
            key="candlestick_chart"
        )

        st.markdown("### Bars")
        st.dataframe(bars_df.tail(MAX_TABLE_ROWS), use_container_width=True)

        st.download_button(
            "📥 Export to CSV",
            bars_df.to_csv(),
            f"bars_{selected_mode}_{threshold:g}.csv",
            "text/csv",
            key="download_bars"
        )
