"""
Streamlit frontend for Logo Animator AI.

This is the main entry point for the application. It renders the two steps
(design a logo with Imagen, animate it with Veo) and hands every state change
to the FlowController.

Environment Variables:
- GEMINI_API_KEY, GOOGLE_GENAI_API_KEY or API_KEY: Default key for Gemini calls
- IMAGEN_MODEL: (Optional) Image model (default: imagen-4.0-generate-001)
- VEO_MODEL: (Optional) Video model (default: veo-3.1-fast-generate-preview)
- VEO_POLL_INTERVAL: (Optional) Seconds between job polls (default: 5)
- VEO_MAX_POLL_ATTEMPTS: (Optional) Poll cap, 0 for none (default: 120)
- VIDEO_DOWNLOAD_TIMEOUT: (Optional) Seconds for the video download (default: 120)
- LOG_LEVEL: (Optional) Logging level (default: INFO)
"""

import streamlit as st
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from logo_animator import (
    AspectRatio,
    CredentialGate,
    CredentialStatus,
    FlowController,
    SessionCredentialProvider,
    Settings,
    Step,
    load_image_bytes,
)
from logo_animator.config import get_env_api_key
from logo_animator.errors import AuthError

# ---------- Streamlit Page Configuration ----------
st.set_page_config(
    page_title="Logo Animator AI",
    page_icon="🎬",
    layout="wide"
)

settings = Settings.from_env()


# ---------- Credential Dialog ----------
@st.dialog("Select API Key")
def _select_key_dialog():
    st.markdown("Paste a Gemini API key with Veo access. It is kept only for this browser session.")
    key = st.text_input("Gemini API Key", type="password")
    if st.button("Use this key", type="primary", use_container_width=True):
        if key.strip():
            provider.store_credential(key)
            st.rerun()
        else:
            st.warning("⚠️ Please paste an API key first.")


provider = SessionCredentialProvider(
    st.session_state,
    opener=_select_key_dialog,
    default_key=get_env_api_key(),
)
gate = CredentialGate(st.session_state, provider)
flow = FlowController(st.session_state, gate, settings=settings)
state = flow.state
# A queued job runs at the end of this script, after every control is drawn disabled.
busy = flow.is_busy

# ---------- Main UI ----------
st.title("🎬 Logo Animator AI")
st.markdown("_From Concept to Animation in Two Simple Steps_")

# ---------- Sidebar: Environment Configuration ----------
with st.sidebar:
    st.markdown("**API Key & Models**")
    if gate.is_present:
        st.caption("✅ API key selected")
    else:
        st.caption("⚠️ No API key selected")
    if st.button("🔑 Change API Key", disabled=busy):
        gate.request_credential()
    st.caption(f"🖼️ Image model: {settings.imagen_model}")
    st.caption(f"🎞️ Video model: {settings.veo_model}")

if state.error:
    st.error(f"**An Error Occurred**\n\n{state.error}")

loading_slot = st.container()


def _render_generate_logo():
    st.header("1️⃣ Design Your Logo")
    st.markdown("_Describe your company and the logo you envision._")

    col_form, col_preview = st.columns(2)
    with col_form:
        with st.form("logo_form"):
            prompt = st.text_area(
                "Logo description",
                placeholder=(
                    "e.g., A minimalist logo for 'EcoBloom', a sustainable plant company, "
                    "featuring a leaf and a water drop."
                ),
                height=140,
                disabled=busy,
            )
            submitted = st.form_submit_button(
                "✨ Generate Logo",
                type="primary",
                use_container_width=True,
                disabled=busy,
            )
        if submitted:
            flow.submit_logo(prompt)
            st.rerun()

    with col_preview:
        if state.logo is not None and not busy:
            st.image(state.logo.data, caption="Generated logo", use_container_width=True)
            if st.button("🎬 Animate This Logo", type="primary", use_container_width=True):
                flow.confirm_logo()
                st.rerun()
        else:
            st.info("💡 Your generated logo will appear here.")


def _render_credential_gate():
    status = gate.ensure_checked()
    if status is CredentialStatus.CHECKING:
        st.info("Verifying API key status...")
        return False
    if status is CredentialStatus.ABSENT:
        st.subheader("Veo API Key Required")
        st.markdown(
            "To generate videos with Veo, you need to select an API key. "
            "This will be used for billing purposes."
        )
        st.caption(
            "For more information, please visit the "
            "[billing documentation](https://ai.google.dev/gemini-api/docs/billing)."
        )
        if st.button("🔑 Select API Key", type="primary", disabled=busy):
            try:
                gate.request_credential()
            except AuthError as exc:
                flow.set_error(str(exc))
                st.rerun()
        return False
    return True


def _render_animate_logo():
    if st.button("← Back", disabled=busy):
        flow.back()
        st.session_state.pop("uploaded_logo_id", None)
        st.rerun()

    st.header("2️⃣ Animate Your Logo")
    st.markdown("_Bring your logo to life with a short animation._")

    col_preview, col_form = st.columns(2)
    with col_preview:
        st.image(state.logo.data, caption="Logo to animate", use_container_width=True)

    with col_form:
        if not _render_credential_gate():
            return

        uploaded = st.file_uploader(
            "Use a different image?",
            type=["png", "jpg", "jpeg", "webp"],
            help="The uploaded image replaces the generated logo",
            disabled=busy,
        )
        if (
            not busy
            and uploaded is not None
            and st.session_state.get("uploaded_logo_id") != uploaded.file_id
        ):
            image_bytes, mime = load_image_bytes(uploaded)
            flow.replace_logo(image_bytes, mime)
            st.session_state["uploaded_logo_id"] = uploaded.file_id
            st.rerun()

        with st.form("animate_form"):
            prompt = st.text_area(
                "Animation description (optional)",
                placeholder="Optional: Describe the animation (e.g., logo materializes from sparkling dust).",
                height=100,
                disabled=busy,
            )
            aspect_ratio = st.radio(
                "Aspect Ratio",
                list(AspectRatio),
                format_func=lambda ratio: ratio.label,
                horizontal=True,
                disabled=busy,
            )
            submitted = st.form_submit_button(
                "🎞️ Animate Logo",
                type="primary",
                use_container_width=True,
                disabled=busy,
            )

        if submitted:
            flow.submit_animation(prompt, aspect_ratio)
            st.rerun()


def _render_result():
    st.header("Your Animated Logo is Ready!")
    video = state.video
    st.video(video.data, format=video.mime_type, autoplay=True, loop=True)
    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            label="📥 Download Video",
            data=video.data,
            file_name="logo_animation.mp4",
            mime=video.mime_type,
            use_container_width=True,
            disabled=busy,
        )
    with col2:
        if st.button("🔁 Create Another", type="primary", use_container_width=True, disabled=busy):
            flow.start_over()
            st.session_state.pop("uploaded_logo_id", None)
            st.rerun()


if state.step is Step.RESULT and state.video is not None:
    _render_result()
elif state.step is Step.ANIMATE_LOGO and state.logo is not None:
    _render_animate_logo()
else:
    _render_generate_logo()

st.caption("Built with Streamlit + Google Gemini (Imagen & Veo).")

# ---------- Queued Job ----------
if busy:
    with loading_slot:
        with st.status(state.loading_message or "Working...", expanded=True) as status:
            def on_progress(message):
                status.update(label=message)
                status.write(message)

            ok = flow.run_pending(on_progress=on_progress)
            status.update(
                label="✅ Done." if ok else "❌ Request failed.",
                state="complete" if ok else "error",
            )
    st.rerun()
