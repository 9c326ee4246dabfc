"""
Classroom Agent - Streamlit Application

Main application for Mr. Matthew Olushola's AI teaching assistant.
Collects student details on the intake screen, then walks the student through
a step-by-step lesson on the teaching screen.
"""

import logging
import streamlit as st

from config import load_settings
from student_profile import CLASS_LEVELS, LANGUAGES, DEFAULT_LANGUAGE, IntakeForm, class_level_label, language_label
from lesson_provider import build_lesson_provider
from view_controller import ViewController

ASSISTANT_NAME = "Mr. Matthew Olushola"
CLASS_WELCOME = "Welcome to Mr. Olushola Matthew AI Agent class"

STATUS_ICONS = {"completed": "✅", "current": "🔵", "pending": "⚪"}


class StreamlitApp:
    """Streamlit application wiring the intake and teaching screens"""

    def __init__(self):
        self.controller = None

        # Initialize page configuration
        self._setup_page_config()

        # Initialize session state
        self._initialize_session_state()

    def _setup_page_config(self):
        """Set up Streamlit page configuration"""
        st.set_page_config(
            page_title=f"{ASSISTANT_NAME} AI Agent",
            page_icon="🎓",
            layout="wide",
        )

    @staticmethod
    @st.cache_resource
    def _initialize_lesson_provider():
        """Build the lesson provider once per server process"""
        return build_lesson_provider(load_settings())

    def _initialize_session_state(self):
        """Initialize Streamlit session state variables"""
        if "controller" not in st.session_state:
            st.session_state.controller = ViewController(
                lesson_provider=self._initialize_lesson_provider()
            )
        if "intake_listening" not in st.session_state:
            st.session_state.intake_listening = False
        if "celebrate" not in st.session_state:
            st.session_state.celebrate = False

        self.controller = st.session_state.controller

    # ----------------------------------
    # Layout
    # ----------------------------------

    def render_header(self):
        """Render the hero header"""
        st.title(f"🎓 {ASSISTANT_NAME} AI Agent")
        st.markdown("#### Your Multilingual Teaching Assistant")
        st.markdown(
            "Personalized step-by-step learning for Primary 1-6, JSS 1-3, SS 1-3, and WAEC preparation "
            "in English, French, Yoruba, Igbo, and Hausa"
        )
        st.markdown("---")

    def render_footer(self):
        """Render the page footer"""
        st.markdown("---")
        st.markdown("""
        <div style='text-align: center; color: gray;'>
            <small>© 2024 Mr. Matthew Olushola AI Agent - Empowering Nigerian Students Through AI Education</small>
        </div>
        """, unsafe_allow_html=True)

    # ----------------------------------
    # Intake screen
    # ----------------------------------

    def render_intake(self):
        """Render the welcome text, intake form and feature highlights"""
        st.header(CLASS_WELCOME)
        st.markdown(
            "Let's get started with your personalized learning experience. "
            "I'm here to help you understand any topic step by step."
        )

        self._render_intake_form()
        self._render_features()

    def _render_intake_form(self):
        """Render the student information form"""
        with st.container(border=True):
            st.subheader("🌍 Student Information")
            st.caption("Tell me about yourself so I can help you learn better")

            col1, col2 = st.columns(2)
            with col1:
                name = st.text_input("Your Name", placeholder="Enter your full name", key="intake_name")
            with col2:
                language_values = [value for value, _ in LANGUAGES]
                language = st.selectbox(
                    "Preferred Language",
                    language_values,
                    index=language_values.index(DEFAULT_LANGUAGE),
                    format_func=language_label,
                    key="intake_language",
                )

            class_level = st.selectbox(
                "Class Level",
                [value for value, _ in CLASS_LEVELS],
                index=None,
                format_func=class_level_label,
                placeholder="Select your class level",
                key="intake_class_level",
            )

            col3, col4 = st.columns(2)
            with col3:
                subject = st.text_input(
                    "Subject", placeholder="e.g., Mathematics, English, Science", key="intake_subject"
                )
            with col4:
                topic_col, mic_col = st.columns([5, 1], vertical_alignment="bottom")
                with topic_col:
                    topic = st.text_input(
                        "Topic", placeholder="What would you like to learn?", key="intake_topic"
                    )
                with mic_col:
                    mic_clicked = st.button(
                        "🎤",
                        key="voice_input",
                        type="primary" if st.session_state.intake_listening else "secondary",
                        help="Voice input",
                    )

            form = IntakeForm(
                name=name or "",
                class_level=class_level or "",
                subject=subject or "",
                topic=topic or "",
                language=language or DEFAULT_LANGUAGE,
                is_listening=st.session_state.intake_listening,
            )

            if mic_clicked:
                form.toggle_voice_input()
                st.session_state.intake_listening = form.is_listening
                st.rerun()
            if form.is_listening:
                st.caption("🎙️ Listening...")

            submit_col, upload_col = st.columns([3, 1])
            with submit_col:
                start = st.button(
                    "Start Learning Session",
                    type="primary",
                    disabled=not form.is_complete(),
                    use_container_width=True,
                    key="start_session",
                )
            with upload_col:
                if st.button("📤 Upload File", use_container_width=True, key="upload_file"):
                    form.upload_file()

            if start and form.submit(self.controller.on_intake_submit):
                st.session_state.intake_listening = False
                st.rerun()

    def _render_features(self):
        """Render the feature highlights shown under the intake form"""
        st.markdown("---")
        st.subheader(f"Why Choose {ASSISTANT_NAME} AI Agent?")
        st.caption("Advanced AI-powered education tailored for Nigerian students")

        levels = [
            ("1-6", "Primary Education", "Complete coverage of Primary 1-6 curriculum"),
            ("JSS", "Junior Secondary", "JSS 1-3 comprehensive learning support"),
            ("SS", "Senior Secondary", "SS 1-3 advanced subject mastery"),
            ("WAEC", "WAEC Prep", "Complete WAEC examination preparation"),
        ]
        for col, (badge, title, text) in zip(st.columns(4), levels):
            with col:
                with st.container(border=True):
                    st.markdown(f"**{badge}**")
                    st.markdown(f"**{title}**")
                    st.caption(text)

        highlights = [
            ("🌍 Multilingual Support", "Learn in English, French, Yoruba, Igbo, or Hausa"),
            ("🎥 Video Lessons", "Auto-generated video explanations for every topic"),
            ("📱 Screen Sharing", "Interactive screen sharing for personalized help"),
        ]
        for col, (title, text) in zip(st.columns(3), highlights):
            with col:
                with st.container(border=True):
                    st.markdown(f"**{title}**")
                    st.caption(text)

    # ----------------------------------
    # Teaching screen
    # ----------------------------------

    def render_teaching(self):
        """Render the lesson for the submitted student"""
        if st.button("← Back to Student Intake", key="back_to_intake"):
            self.controller.on_back()
            st.session_state.celebrate = False
            st.rerun()

        record = self.controller.record
        st.info(
            f"📘 **{CLASS_WELCOME}**\n\n"
            f"Hello {record.name}! I'm excited to help you learn {record.subject} today."
        )

        main_col, progress_col = st.columns([2, 1])
        with main_col:
            self._render_lesson_overview()
        with progress_col:
            self._render_progress()

        self._render_current_step()

    def _render_lesson_overview(self):
        """Render lesson title, objectives and lesson tools"""
        record = self.controller.record
        lesson = self.controller.lesson
        with st.container(border=True):
            st.subheader(f"🎯 {lesson.title}")
            st.markdown(f"`{record.class_label}` `{record.language_label}`")

            st.markdown("**Learning Objectives:**")
            for objective in lesson.objectives:
                st.markdown(f"✅ {objective}")

            st.markdown("---")
            screen_share = self.controller.screen_share
            sharing = screen_share.poll()
            col1, col2, col3 = st.columns(3)
            with col1:
                st.button("▶️ Generate Lesson Video", key="generate_video")
            with col2:
                # Callback runs before the rerun, so the request is queued before poll()
                st.button(
                    f"🖥️ {'Stop' if sharing else 'Start'} Screen Share",
                    key="screen_share",
                    disabled=screen_share.pending,
                    on_click=screen_share.toggle,
                )
            with col3:
                st.button("🔊 Voice Narration", key="voice_narration")
            if screen_share.pending:
                st.caption("Waiting for screen share permission...")

    def _render_progress(self):
        """Render the clickable step list"""
        tracker = self.controller.tracker
        with st.container(border=True):
            st.subheader("🏆 Progress")
            st.progress(tracker.progress())

            for index, step in enumerate(tracker.lesson.steps):
                icon = "✅" if tracker.is_completed(index) else STATUS_ICONS[tracker.status(index)]
                if st.button(
                    f"{icon} {step.title}",
                    key=f"select_step_{step.id}",
                    type="primary" if index == tracker.current_step else "secondary",
                    use_container_width=True,
                ):
                    tracker.select_step(index)
                    st.rerun()

    def _render_current_step(self):
        """Render the active step with its navigation buttons"""
        tracker = self.controller.tracker
        step = tracker.current()

        with st.container(border=True):
            st.subheader(f"📄 Step {tracker.current_step + 1}: {step.title}")

            st.markdown("**Explanation:**")
            st.markdown(step.explanation)

            if step.example:
                st.success(f"**Worked Example:**\n\n{step.example}")

            st.markdown("**Quick Checks:**")
            for number, question in enumerate(step.quick_check, start=1):
                st.markdown(f"{number}. {question}")

            prev_col, _, next_col = st.columns([1, 2, 1])
            with prev_col:
                if st.button("Previous Step", disabled=not tracker.can_go_back(), key="previous_step"):
                    tracker.previous_step()
                    st.rerun()
            with next_col:
                label = "Complete Lesson" if tracker.is_last_step() else "Next Step"
                if st.button(label, type="primary", key="complete_step"):
                    st.session_state.celebrate = tracker.complete_current()
                    st.rerun()

        if tracker.lesson_complete:
            st.success(f"🎉 Lesson complete! Great work, {self.controller.record.name}.")
            if st.session_state.celebrate:
                st.balloons()
                st.session_state.celebrate = False

    def run(self):
        """Main application entry point"""
        self.render_header()

        if self.controller.is_teaching:
            self.render_teaching()
        else:
            self.render_intake()

        self.render_footer()


def main():
    settings = load_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    app = StreamlitApp()
    app.run()


if __name__ == "__main__":
    main()
