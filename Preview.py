# Preview.py
"""
Streamlit preview for RotSprite pixel-art rotation.
Upload a sprite, pick an angle, compare the original with the rotated
result and download it as PNG.

Run with:
    streamlit run Preview.py
"""

import streamlit as st
import logging
import cv2
import numpy as np
from typing import Dict

from rotsprite.adapters import rotate_image, to_bgra
from rotsprite.errors import RotSpriteError
from rotsprite.geometry import predict_output_size
from rotsprite.utils import load_image_from_bytes, encode_image, get_image_stats


# LOGGING CONFIGURATION


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# STREAMLIT PAGE CONFIGURATION

st.set_page_config(
    page_title="RotSprite Preview",
    page_icon="🌀",
    layout="wide",
    initial_sidebar_state="collapsed"
)

# Largest on-screen size of a preview, in screen pixels
PREVIEW_MAX_SIDE = 480


# HELPER FUNCTIONS


def get_app_info() -> Dict[str, str]:
    """Get application metadata."""
    return {
        "title": "RotSprite Preview",
        "description": "Pixel-art rotation with Scale2x oversampling",
        "version": "1.0.0",
    }


def to_display(img: np.ndarray) -> np.ndarray:
    """
    Upscale a BGRA image for display without smoothing.

    Browsers blur small images when stretching them, which hides exactly
    the edges this tool is about.
    """
    height, width = img.shape[:2]
    zoom = max(1, PREVIEW_MAX_SIDE // max(height, width))
    big = cv2.resize(img, (width * zoom, height * zoom), interpolation=cv2.INTER_NEAREST)
    return cv2.cvtColor(big, cv2.COLOR_BGRA2RGBA)


def display_image_stats(img: np.ndarray) -> None:
    """Display image size and transparency stats."""
    stats = get_image_stats(img)

    col1, col2, col3 = st.columns(3)

    with col1:
        st.metric("Size", f"{stats.get('width')}×{stats.get('height')}")

    with col2:
        st.metric("Channels", stats.get("channels", "?"))

    with col3:
        ratio = stats.get("opaque_ratio")
        st.metric("Opaque", f"{ratio * 100:.0f}%" if ratio is not None else "?")


# MAIN APPLICATION


def main():
    """Main Streamlit application."""
    info = get_app_info()

    st.title(f"🌀 {info['title']}")
    st.write(info["description"])

    st.write("---")

    uploaded_file = st.file_uploader(
        "Upload a sprite",
        type=["png", "bmp", "gif", "webp"],
        help="Images with transparency keep it; uncovered pixels become transparent",
    )

    # No File Uploaded
    if uploaded_file is None:
        st.info("👆 Please upload a pixel-art image to rotate")
        st.markdown("""
        **How it works:**
        - Multiples of 90° are exact pixel permutations
        - Other angles upscale 8× with Scale2x, rotate, then downsample
        """)
        return

    # Load Image
    try:
        image_bytes = uploaded_file.getvalue()
        img = to_bgra(load_image_from_bytes(image_bytes))
        logger.info(f"Loaded image: {img.shape}")

    except ValueError as e:
        logger.error(f"Error loading image: {e}", exc_info=True)
        st.error(f"❌ Failed to load image: {str(e)}")
        return

    angle = st.slider("Angle (degrees, clockwise)", min_value=0, max_value=359, value=45)

    height, width = img.shape[:2]
    out_width, out_height = predict_output_size(width, height, angle)
    st.caption(f"Output will be {out_width}×{out_height}")

    # Rotate
    with st.spinner("⏳ Rotating..."):
        try:
            rotated = rotate_image(img, angle)
        except RotSpriteError as e:
            logger.error(f"Rotation failed: {e}", exc_info=True)
            st.error(f"❌ Rotation failed: {str(e)}")
            return

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Original")
        st.image(to_display(img))
        display_image_stats(img)

    with col2:
        st.subheader(f"Rotated {angle}°")
        st.image(to_display(rotated))
        display_image_stats(rotated)

    st.write("---")

    # Export
    stem = uploaded_file.name.rsplit(".", 1)[0]
    st.download_button(
        "📥 Download PNG",
        encode_image(rotated, ".png"),
        file_name=f"{stem}_rot{angle}.png",
        mime="image/png",
    )


if __name__ == "__main__":
    main()
