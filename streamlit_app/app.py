import os
import sys
from datetime import date
import streamlit as st

# Ensure project root is on sys.path to import local packages when running from streamlit_app/
PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from recrut_core.adapters.rest_api import RestApiClient, build_api_client
from recrut_core.analytics import candidates_frame
from recrut_core.config.settings import get_app_config
from recrut_core.domain.candidate import CandidateState
from recrut_core.domain.user import CurrentUser
from recrut_core.errors import ApiError
from recrut_core.services.candidate_service import CandidateService
from recrut_core.services.interview_service import InterviewService
from recrut_core.services.session_service import SessionService
from recrut_core.utils.formatting import format_long_date, format_short_date
from recrut_core.utils.logging import get_logger
from recrut_core.views.applications import ApplicationsPage
from recrut_core.views.candidates import ALL_STATES, CandidatesPage
from recrut_core.views.dashboard import DashboardPage
from recrut_core.views.interviews import MyInterviewsPage
from streamlit_app.ui_components import (
    StreamlitNotifier,
    flush_toasts,
    inject_global_style,
    plot_state_distribution,
    render_documents,
    render_history,
    render_interview_card,
    state_badge,
)

st.set_page_config(page_title="Recrutement", layout="wide")

logger = get_logger("recrut.app")
notifier = StreamlitNotifier()

PAGE_STATE_KEYS = ["page_dashboard", "page_candidates", "page_applications", "page_interviews"]


# --------------------------------------------------------------------------
# Session: client API, utilisateur courant, état des pages
# --------------------------------------------------------------------------
def _api() -> RestApiClient:
    token = st.session_state.get("token", "")
    client = st.session_state.get("api_client")
    if client is None or client.token != token:
        client = build_api_client(token=token)
        st.session_state["api_client"] = client
    return client


def _current_user() -> CurrentUser | None:
    if "current_user" not in st.session_state:
        try:
            st.session_state["current_user"] = SessionService(_api()).load_current_user()
        except ApiError as e:
            logger.warning("current_user_failed", extra={"error": e.message})
            st.session_state["current_user"] = None
    return st.session_state["current_user"]


def _organization_id() -> int | None:
    user = _current_user()
    return (user.organization_id if user else None) or get_app_config().organization_id


def _reset_pages() -> None:
    for k in PAGE_STATE_KEYS + ["current_user", "confirm_delete", "confirm_cancel", "confirm_app_delete"]:
        st.session_state.pop(k, None)


def _page_state(key: str, factory):
    """Instancie et charge l'état d'une page à sa première ouverture."""
    state = st.session_state.get(key)
    if state is None:
        state = factory()
        with st.spinner("Chargement..."):
            state.load()
        st.session_state[key] = state
    return state


# --------------------------------------------------------------------------
# Pages
# --------------------------------------------------------------------------
def page_dashboard():
    api = _api()
    state: DashboardPage = _page_state(
        "page_dashboard",
        lambda: DashboardPage(SessionService(api), CandidateService(api), InterviewService(api), notifier),
    )
    st.caption("ESPACE RECRUTEUR")
    st.title(f"Bonjour, {state.greeting_name}")
    st.caption(f"🕒 {format_long_date(date.today()).capitalize()}")

    stats = state.stats
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.metric("Candidats", stats.candidates_count)
    with c2:
        st.metric("Entretiens", stats.interviews_today, help="Aujourd'hui")
    with c3:
        st.metric("Documents", stats.documents_count)
    with c4:
        st.metric("Notifications", stats.unread_notifications)

    st.divider()
    left, right = st.columns([2, 1])
    with left:
        st.subheader("Candidatures récentes")
        if not stats.recent_candidates:
            st.info("Aucune candidature récente")
        for c in stats.recent_candidates:
            cols = st.columns([3, 2, 2])
            cols[0].write(f"**{c.full_name}**  \n{c.email}")
            cols[1].caption(c.job_offer.title if c.job_offer else "Candidature spontanée")
            cols[2].markdown(state_badge(c.state), unsafe_allow_html=True)
    with right:
        plot_state_distribution(stats.by_state)


def _make_candidates_page(api: RestApiClient) -> CandidatesPage:
    state = CandidatesPage(CandidateService(api), notifier, organization_id=_organization_id())
    state.load_choices()
    return state


def page_candidates():
    api = _api()
    user = _current_user()
    state: CandidatesPage = _page_state(
        "page_candidates",
        lambda: _make_candidates_page(api),
    )

    head, action = st.columns([4, 1])
    with head:
        st.title("Candidathèque")
        st.caption("Gérez les candidats de votre organisation")
    with action:
        if st.button("➕ Ajouter un candidat", type="primary"):
            state.open_create()
            st.rerun()

    _candidate_dialogs(state)

    # Filtres
    options = [ALL_STATES] + [s.value for s in CandidateState]
    chosen = st.radio(
        "Statut",
        options,
        index=options.index(state.selected_state),
        horizontal=True,
        format_func=lambda v: "Tous" if v == ALL_STATES else CandidateState(v).label,
        label_visibility="collapsed",
    )
    if chosen != state.selected_state:
        state.select_state(chosen)
    state.search_query = st.text_input("Rechercher par nom, email...", value=state.search_query)

    rows = state.filtered()
    if not rows:
        st.subheader("Aucun candidat trouvé")
        st.caption("Essayez de modifier vos filtres ou lancez une nouvelle recherche.")
        if st.button("Effacer les filtres"):
            state.clear_filters()
            st.rerun()
        return

    with st.expander("Vue tableau / export"):
        df = candidates_frame(rows)
        st.dataframe(df, use_container_width=True)
        st.download_button("Exporter CSV", df.to_csv(index=False).encode("utf-8"), file_name="candidats.csv")

    can_manage = bool(user and user.is_staff)
    for c in rows:
        with st.container(border=True):
            info, meta, status, actions = st.columns([3, 2, 2, 2])
            with info:
                st.markdown(f"**{c.initials}** · **{c.full_name}**")
                st.caption(f"✉️ {c.email}" + (f" · 📞 {c.phone}" if c.phone else ""))
            with meta:
                st.caption(c.job_offer.title if c.job_offer else "Candidature spontanée")
                st.caption(f"📅 {format_short_date(c.created_at)}")
            with status:
                st.markdown(state_badge(c.state), unsafe_allow_html=True)
                with st.popover("Changer le statut"):
                    for s in CandidateState:
                        if st.button(s.label, key=f"st_{c.id}_{s.value}", disabled=c.state == s):
                            state.change_state(c.id, s)
                            st.rerun()
            with actions:
                b1, b2, b3, b4 = st.columns(4)
                if b1.button("🕘", key=f"hist_{c.id}", help="Voir l'historique des statuts"):
                    state.open_history(c.id)
                    st.rerun()
                if b2.button("📄", key=f"docs_{c.id}", help="Voir les documents"):
                    state.open_documents(c.id)
                    st.rerun()
                if can_manage:
                    if b3.button("✏️", key=f"edit_{c.id}", help="Modifier le candidat"):
                        state.open_edit(c)
                        st.rerun()
                    if b4.button("🗑", key=f"del_{c.id}", help="Supprimer le candidat"):
                        st.session_state["confirm_delete"] = c.id
                        st.rerun()
            if st.session_state.get("confirm_delete") == c.id:
                st.warning("Êtes-vous sûr de vouloir supprimer ce candidat ? Cette action est irréversible.")
                y, n = st.columns(2)
                if y.button("Confirmer la suppression", key=f"del_ok_{c.id}", type="primary"):
                    st.session_state.pop("confirm_delete", None)
                    state.delete(c.id)
                    st.rerun()
                if n.button("Annuler", key=f"del_ko_{c.id}"):
                    st.session_state.pop("confirm_delete", None)
                    st.rerun()


def _candidate_form(state: CandidatesPage, prefix: str) -> bool:
    """Champs du formulaire; retourne True si soumis."""
    f = state.form
    offer_ids = [""] + [str(j.id) for j in state.job_offers]
    offer_labels = {"": "Aucune", **{str(j.id): j.title for j in state.job_offers}}
    form_ids = [""] + [str(x.id) for x in state.forms]
    form_labels = {"": "Aucun", **{str(x.id): x.name for x in state.forms}}
    with st.form(f"{prefix}_candidate"):
        f.first_name = st.text_input("Prénom *", value=f.first_name, placeholder="Jean")
        f.last_name = st.text_input("Nom *", value=f.last_name, placeholder="Dupont")
        f.email = st.text_input("Email *", value=f.email, placeholder="jean.dupont@example.com")
        f.phone = st.text_input("Téléphone", value=f.phone, placeholder="+33 6 12 34 56 78")
        f.job_offer_id = st.selectbox(
            "Offre d'emploi", offer_ids,
            index=offer_ids.index(f.job_offer_id) if f.job_offer_id in offer_ids else 0,
            format_func=lambda v: offer_labels.get(v, v),
        )
        if prefix == "create":
            f.form_id = st.selectbox(
                "Formulaire", form_ids,
                index=form_ids.index(f.form_id) if f.form_id in form_ids else 0,
                format_func=lambda v: form_labels.get(v, v),
            )
        f.notes = st.text_area("Notes", value=f.notes, placeholder="Notes supplémentaires sur le candidat...")
        return st.form_submit_button("Créer" if prefix == "create" else "Modifier", type="primary")


def _candidate_dialogs(state: CandidatesPage) -> None:
    if state.is_create_open:
        with st.container(border=True):
            st.subheader("Créer un candidat")
            st.caption("Ajoutez un nouveau candidat à votre organisation.")
            if _candidate_form(state, "create"):
                if state.create():
                    st.rerun()
            if st.button("Annuler", key="create_cancel"):
                state.close_create()
                st.rerun()

    if state.is_edit_open:
        with st.container(border=True):
            st.subheader("Modifier le candidat")
            st.caption("Modifiez les informations du candidat.")
            if _candidate_form(state, "edit"):
                if state.update():
                    st.rerun()
            if st.button("Annuler", key="edit_cancel"):
                state.close_edit()
                st.rerun()

    if state.is_history_open:
        c = state.find(state.selected_candidate_id)
        with st.container(border=True):
            st.subheader("🕘 Historique des statuts")
            st.caption(
                f"Historique des changements de statut pour {c.full_name}" if c else "Historique des changements de statut"
            )
            render_history(state.history)
            if st.button("Fermer", key="history_close"):
                state.close_history()
                st.rerun()

    if state.is_documents_open:
        c = state.find(state.selected_candidate_id)
        with st.container(border=True):
            st.subheader("📄 Documents du candidat")
            if c:
                st.caption(f"Documents de {c.full_name}")
            render_documents(state.documents, state.download_document)
            if state.downloaded:
                name, data = state.downloaded
                st.download_button(f"Enregistrer {name}", data, file_name=name)
            if st.button("Fermer", key="documents_close"):
                state.close_documents()
                st.rerun()


def page_applications():
    api = _api()
    user = _current_user()
    state: ApplicationsPage = _page_state(
        "page_applications",
        lambda: ApplicationsPage(
            CandidateService(api), notifier,
            organization_id=_organization_id(), is_candidate=bool(user and user.is_candidate),
        ),
    )
    st.title("Mes candidatures")
    if not state.is_candidate:
        st.info("Cette page est réservée aux candidats.")
        return

    if state.is_history_open:
        with st.container(border=True):
            st.subheader("🕘 Historique de la candidature")
            render_history(state.history)
            if st.button("Fermer", key="app_history_close"):
                state.close_history()
                st.rerun()

    if not state.applications:
        st.info("Vous n'avez encore aucune candidature.")
        return

    for a in state.applications:
        with st.container(border=True):
            info, actions = st.columns([5, 1])
            with info:
                st.markdown(f"**{a.full_name}** {state_badge(a.state)}", unsafe_allow_html=True)
                st.caption(f"✉️ {a.email}" + (f" · 📞 {a.phone}" if a.phone else ""))
                if a.job_offer:
                    st.write(f"📋 {a.job_offer.title}")
                if a.form:
                    st.write(f"📝 {a.form.name}")
                if a.manager:
                    st.write(f"👤 Manager: {a.manager.name}")
                if a.created_at:
                    st.caption(f"Candidature du {format_long_date(a.created_at.date(), weekday=False)}")
            with actions:
                if st.button("🕘", key=f"app_hist_{a.id}", help="Voir l'historique"):
                    state.open_history(a)
                    st.rerun()
                if state.can_cancel(a) and st.button("✖", key=f"app_cancel_{a.id}", help="Annuler la candidature"):
                    st.session_state["confirm_cancel"] = a.id
                    st.rerun()
                if st.button("🗑", key=f"app_del_{a.id}", help="Supprimer la candidature"):
                    st.session_state["confirm_app_delete"] = a.id
                    st.rerun()
            if st.session_state.get("confirm_cancel") == a.id:
                st.warning("Êtes-vous sûr de vouloir annuler cette candidature ?")
                if st.button("Confirmer l'annulation", key=f"app_cancel_ok_{a.id}"):
                    st.session_state.pop("confirm_cancel", None)
                    state.cancel(a)
                    st.rerun()
            if st.session_state.get("confirm_app_delete") == a.id:
                st.warning("Êtes-vous sûr de vouloir supprimer définitivement cette candidature ? Cette action est irréversible.")
                if st.button("Confirmer la suppression", key=f"app_del_ok_{a.id}"):
                    st.session_state.pop("confirm_app_delete", None)
                    state.delete(a)
                    st.rerun()


def page_interviews():
    api = _api()
    user = _current_user()
    state: MyInterviewsPage = _page_state(
        "page_interviews",
        lambda: MyInterviewsPage(
            InterviewService(api), notifier,
            organization_id=_organization_id(), is_candidate=bool(user and user.is_candidate),
        ),
    )
    st.title("Mes entretiens")
    if not state.is_candidate:
        st.info("Cette page est réservée aux candidats.")
        return
    if not state.interviews:
        st.info("Aucun entretien programmé pour le moment.")
        return

    upcoming, past = state.split()
    if upcoming:
        st.subheader(f"Entretiens à venir ({len(upcoming)})")
        for it in upcoming:
            render_interview_card(it)
    if past:
        st.subheader(f"Entretiens passés ({len(past)})")
        for it in past:
            render_interview_card(it, past=True)


PAGES = {
    "Tableau de bord": page_dashboard,
    "Candidats": page_candidates,
    "Mes candidatures": page_applications,
    "Mes entretiens": page_interviews,
}


def _logout() -> None:
    def _clear():
        _api().clear_token()
        st.session_state["token"] = ""
        st.session_state.pop("api_client", None)
        _reset_pages()

    SessionService(_api()).logout(clear_token=_clear)
    notifier.success("Déconnexion réussie")


def main():
    inject_global_style()
    flush_toasts()

    if "token" not in st.session_state:
        st.session_state["token"] = get_app_config().api_token

    st.sidebar.title("Navigation")
    pages = list(PAGES.keys())
    # Respecter ?page=... en query param
    try:
        qp_page = st.query_params.get("page")
    except Exception:
        qp_page = None
    default_page = qp_page if qp_page in pages else pages[0]
    page = st.sidebar.radio("Page", pages, index=pages.index(default_page))

    st.sidebar.markdown("---")
    st.sidebar.subheader("Connexion")
    token = st.sidebar.text_input("Jeton d'accès", value=st.session_state["token"], type="password")
    if token != st.session_state["token"]:
        st.session_state["token"] = token
        _reset_pages()
    user = _current_user()
    if user:
        st.sidebar.caption(f"{user.name or user.email} · {user.role.value if user.role else '-'}")
    elif st.session_state["token"]:
        st.sidebar.warning("Impossible de charger l'utilisateur courant")

    if st.sidebar.button("Rafraîchir données"):
        _reset_pages()
        st.rerun()
    if st.sidebar.button("Se déconnecter"):
        _logout()
        st.rerun()

    if not st.session_state["token"]:
        st.info("Renseignez un jeton d'accès dans la barre latérale pour continuer.")
        return
    PAGES[page]()
    flush_toasts()


if __name__ == "__main__":
    main()
