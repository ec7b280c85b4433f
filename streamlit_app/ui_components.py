import streamlit as st
import pandas as pd
import plotly.express as px

from recrut_core.domain.candidate import STATE_COLORS, CandidateState, StateHistory, state_label
from recrut_core.domain.document import Document, format_size
from recrut_core.domain.interview import Interview
from recrut_core.utils.formatting import format_duration, format_long_date, format_short_datetime, format_time


TOAST_KEY = "_pending_toasts"
_ICONS = {"success": "✅", "error": "❌", "info": "ℹ️"}


class StreamlitNotifier:
    """Notifier à base de st.toast.

    Les messages sont mis en file dans session_state puis affichés au run suivant,
    car un st.rerun() ferait disparaître un toast émis juste avant.
    """

    def _push(self, kind: str, message: str) -> None:
        st.session_state.setdefault(TOAST_KEY, []).append((kind, message))

    def success(self, message: str) -> None:
        self._push("success", message)

    def error(self, message: str) -> None:
        self._push("error", message)

    def info(self, message: str) -> None:
        self._push("info", message)


def flush_toasts() -> None:
    for kind, message in st.session_state.pop(TOAST_KEY, []):
        st.toast(message, icon=_ICONS.get(kind))


def inject_global_style():
    st.markdown(
        """
        <style>
        .block-container { padding-top: 1rem; }
        [data-testid="stMetric"] {
            background: #ffffff; border: 1px solid #ececec; border-radius: 12px;
            padding: 14px; box-shadow: 0 2px 8px rgba(0,0,0,.04);
        }
        [data-testid="stMetricLabel"],
        [data-testid="stMetricValue"],
        [data-testid="stMetricDelta"] {
            color: #000 !important;
        }
        [data-testid="stMetric"] * { color: #000; }
        .state-pill { border-radius: 999px; padding: 2px 10px; font-size: .8rem; font-weight: 500; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def state_badge(state) -> str:
    """Pastille HTML colorée pour un état candidat."""
    try:
        bg, fg = STATE_COLORS[CandidateState(state)]
    except ValueError:
        bg, fg = "#f3f4f6", "#374151"
    return f'<span class="state-pill" style="background:{bg};color:{fg}">{state_label(state)}</span>'


def render_history(history: list[StateHistory]) -> None:
    """Chronologie des changements de statut."""
    if not history:
        st.caption("Aucun changement de statut enregistré")
        return
    for item in history:
        prev = state_badge(item.previous_state) if item.previous_state else "—"
        st.markdown(f"{prev} → {state_badge(item.new_state)}", unsafe_allow_html=True)
        st.caption(f"👤 {item.changed_by_name or '-'} · 🕒 {format_short_datetime(item.changed_at)}")
        if item.comment:
            st.info(item.comment)


def render_documents(documents: list[Document], on_download) -> None:
    if not documents:
        st.caption("Aucun document pour ce candidat")
        return
    for doc in documents:
        cols = st.columns([4, 2, 1])
        with cols[0]:
            st.write(f"📄 **{doc.display_name}**")
            if doc.description:
                st.caption(doc.description)
        with cols[1]:
            st.caption(f"{doc.type} · {format_size(doc.size)}")
        with cols[2]:
            if st.button("⬇", key=f"dl_{doc.id}", help="Télécharger"):
                on_download(doc)


def render_interview_card(interview: Interview, past: bool = False) -> None:
    start = interview.starts_at()
    with st.container(border=True):
        head, status = st.columns([5, 1])
        with head:
            st.markdown(f"**📅 {interview.title}**")
            if interview.description:
                st.caption(interview.description)
        with status:
            st.caption(interview.status.label)
        st.write(f"🗓 {format_long_date(start.date())} · 🕒 {format_time(start)} ({format_duration(interview.duration)})")
        if interview.location:
            st.write(f"📍 {interview.location}")
        if not past and interview.meeting_link:
            st.markdown(f"🎥 [Lien de visioconférence]({interview.meeting_link})")
        if not past and interview.participant_ids:
            st.caption(f"👥 {len(interview.participant_ids)} participant(s)")


def plot_state_distribution(counts: pd.Series) -> None:
    """Répartition des candidats par état (camembert)."""
    if counts is None or counts.sum() == 0:
        st.info("Aucun candidat à afficher")
        return
    nz = counts[counts > 0]
    fig = px.pie(values=nz.values, names=nz.index, title="Candidats par statut")
    fig.update_layout(template="plotly_white", height=380)
    st.plotly_chart(fig, use_container_width=True)
