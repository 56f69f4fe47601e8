import streamlit as st
import pandas as pd
import logging
import warnings
from typing import Optional

from loss_playground import (
    Dataset,
    LossPlaygroundError,
    PlaygroundConfig,
    VisualizationController,
)
from loss_playground.config import INITIAL_RANDOM, INITIAL_ZERO
from loss_playground.dataset import DEFAULT_POINTS
from loss_playground.render import (
    contour_figure,
    loss_curve_figure,
    regression_figure,
)

warnings.filterwarnings('ignore')

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger("regression_app")

MODE_SLIDER = "🎚️ Slider path"
MODE_CLICK = "🖱️ Click to select"
MODE_DUAL = "📉 Dual panel"

CLICK_KEY = "contour_click"
CLICK_STEP = 6

# Configure Streamlit page
st.set_page_config(
    page_title="Loss Playground",
    page_icon="🎯",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .stApp { background-color: #1e1e2f; color: white; }

    .metric-card {
        background: rgba(255, 255, 255, 0.1);
        padding: 1rem;
        border-radius: 4px;
        border: 1px solid rgba(255, 255, 255, 0.2);
        border-left: 4px solid #ff00ff;
        margin: 0.5rem 0;
        text-align: center;
    }

    .intro-title { color: #00ffff; font-size: 18px; }
</style>
""", unsafe_allow_html=True)


def sidebar_config() -> PlaygroundConfig:
    """Read the session settings from the sidebar."""
    st.sidebar.header("Parameter Domain")
    col1, col2 = st.sidebar.columns(2)
    with col1:
        w_min = st.number_input("w min", value=-1.0, step=0.5)
        b_min = st.number_input("b min", value=-1.0, step=0.5)
    with col2:
        w_max = st.number_input("w max", value=3.0, step=0.5)
        b_max = st.number_input("b max", value=5.0, step=0.5)

    st.sidebar.header("Contours")
    canvas = st.sidebar.slider("Canvas size (pixels)", 100, 400, 300, 50,
                               help="Every pixel is one loss evaluation per point.")
    band = st.sidebar.number_input("Band half-width", value=0.1, min_value=0.01, step=0.05, format="%.2f")

    st.sidebar.header("Path")
    initial = st.sidebar.radio("Initial anchor", ["Zero", "Random"], horizontal=True)
    seed = st.sidebar.number_input("Random seed", 0, 10000, 42)

    return PlaygroundConfig(
        w_min=w_min, w_max=w_max, b_min=b_min, b_max=b_max,
        canvas_width=canvas, canvas_height=canvas,
        band=band,
        initial_mode=INITIAL_RANDOM if initial == "Random" else INITIAL_ZERO,
        seed=int(seed),
    )


def get_controller(config: PlaygroundConfig) -> Optional[VisualizationController]:
    """Reuse the session controller, rebuilding it when the settings change."""
    controller = st.session_state.get('controller')
    if controller is not None and controller.config == config:
        return controller

    points = controller.dataset if controller is not None else DEFAULT_POINTS
    try:
        controller = VisualizationController(points, config=config)
    except LossPlaygroundError as e:
        st.error(f"Could not start the playground: {e}")
        return None

    logger.info("Built controller for %d points (canvas %dx%d)",
                len(controller.dataset), config.canvas_width, config.canvas_height)
    st.session_state.controller = controller
    return controller


def data_controls(controller: VisualizationController):
    """Point editing: random points, reset, CSV upload and download."""
    st.sidebar.header("Data")

    if st.sidebar.button("➕ Add random point"):
        point = controller.append_random_point()
        st.sidebar.success(f"Added ({point.x:.2f}, {point.y:.2f})")

    if st.sidebar.button("🔄 Reset points"):
        controller.set_dataset(DEFAULT_POINTS)

    uploaded_file = st.sidebar.file_uploader(
        "Upload points (CSV with x, y columns)",
        type=['csv'],
        help="Rows with missing or non-numeric values are dropped."
    )
    if uploaded_file is not None:
        upload_id = (uploaded_file.name, uploaded_file.size)
        if st.session_state.get('upload_id') != upload_id:
            st.session_state.upload_id = upload_id
            try:
                df = pd.read_csv(uploaded_file)
                controller.set_dataset(Dataset.from_frame(df))
                st.sidebar.success(f"Loaded {len(controller.dataset)} points")
            except LossPlaygroundError as e:
                st.sidebar.error(f"Upload rejected, keeping previous points: {e}")
            except (pd.errors.ParserError, UnicodeDecodeError) as e:
                st.sidebar.error(f"Could not read CSV: {e}")

    st.sidebar.download_button(
        "💾 Download points CSV",
        data=controller.dataset.to_frame().to_csv(index=False),
        file_name="points.csv",
        mime="text/csv"
    )


def apply_click_selection(controller: VisualizationController):
    """Feed the last selected lattice point on the contour panel to the controller."""
    event = st.session_state.get(CLICK_KEY)
    if not event:
        return
    points = event.get('selection', {}).get('points', [])
    if points:
        controller.select_pixel(points[0]['x'], points[0]['y'])


def display_state(controller: VisualizationController):
    state = controller.get_current_state()

    col1, col2, col3 = st.columns(3)
    with col1:
        st.markdown(f"""
        <div class="metric-card">
            <h4>Current</h4>
            <p style="font-size: 1.3em;">w: {state.w:.3f}, b: {state.b:.3f}</p>
        </div>
        """, unsafe_allow_html=True)
    with col2:
        st.markdown(f"""
        <div class="metric-card">
            <h4>Loss</h4>
            <p style="font-size: 1.3em;">{state.loss:.3f}</p>
        </div>
        """, unsafe_allow_html=True)
    with col3:
        st.markdown(f"""
        <div class="metric-card">
            <h4>Best Fit</h4>
            <p style="font-size: 1.3em;">w: {state.best_w:.3f}, b: {state.best_b:.3f}</p>
        </div>
        """, unsafe_allow_html=True)

    summary = controller.get_fit_summary()
    with st.expander("📊 Best-fit statistics", expanded=False):
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("R²", f"{summary.r_squared:.4f}")
        with col2:
            st.metric("RMSE", f"{summary.rmse:.4f}")
        with col3:
            if summary.slope_p_value is not None:
                st.metric("Slope p-value", f"{summary.slope_p_value:.4g}")
            else:
                st.metric("Slope p-value", "n/a")
        st.dataframe(controller.dataset.to_frame(), use_container_width=True)


def create_interactive_playground():
    """Create the main playground interface."""

    st.markdown("<h2 style='text-align: center;'>Neon Interactive Linear Regression</h2>",
                unsafe_allow_html=True)

    mode = st.radio("Interaction", [MODE_SLIDER, MODE_CLICK, MODE_DUAL], horizontal=True)

    config = sidebar_config()
    controller = get_controller(config)
    if controller is None:
        return

    data_controls(controller)

    st.markdown("""
    <p class="intro-title">Welcome to the Neon Regression Playground!</p>
    <p>Click on the contour plot to change the regression line, or use the slider
    to interpolate between the initial and best fit line.</p>
    """, unsafe_allow_html=True)

    if mode == MODE_CLICK:
        apply_click_selection(controller)
    else:
        progress = st.slider("Path progress", 0, 100, 0, key="path_progress")
        if progress != controller.progress or controller.selection is not None:
            controller.set_progress(progress)

    frame = controller.snapshot()

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(regression_figure(frame, config), use_container_width=True)
    with col2:
        if mode == MODE_CLICK:
            st.plotly_chart(
                contour_figure(frame, config, click_step=CLICK_STEP),
                use_container_width=True,
                on_select="rerun",
                selection_mode="points",
                key=CLICK_KEY
            )
        else:
            st.plotly_chart(contour_figure(frame, config), use_container_width=True)

    if mode == MODE_DUAL:
        w_values, losses = controller.get_loss_curve()
        st.plotly_chart(
            loss_curve_figure(w_values, losses, frame.state.w, frame.state.loss, frame.state.b),
            use_container_width=True
        )

    display_state(controller)

    if controller.last_error is not None:
        st.warning(f"Showing the previous fit: {controller.last_error}")


def main():
    """Main application entry point with error handling."""
    try:
        create_interactive_playground()
    except Exception as e:
        logger.exception("Unhandled error in playground")
        st.error(f"An unexpected error occurred: {e}")
        st.info("Please refresh the page and try again. If the problem persists, check your data format.")

        with st.expander("🔧 Error Details (for debugging)"):
            st.code(str(e))
            import traceback
            st.code(traceback.format_exc())


if __name__ == "__main__":
    main()
