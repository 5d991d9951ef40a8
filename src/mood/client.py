"""Application-state container tying the session, records, editor and views together."""

from collections.abc import Callable
from datetime import date
from typing import Optional

import structlog

from shared_types import SessionState

from .adapter import RecordStoreAdapter
from .editor import EntryEditor
from .records import RecordMap
from .report import Celebration, plain_text_report
from .session import IdentityProvider, Session, SessionGate
from .store import RecordStore
from .views import STREAK_LENGTH, DerivedViews, build_views

logger = structlog.get_logger()

ViewsListener = Callable[[DerivedViews], None]


class MoodFlowClient:
    """One signed-in user's journal.

    Derived views are rebuilt on each "record map changed" event from the
    adapter and pushed to registered observers.
    """

    def __init__(
        self,
        provider: IdentityProvider,
        store: RecordStore,
        today: Callable[[], date] = date.today,
        celebration: Optional[Celebration] = None,
        streak_length: int = STREAK_LENGTH,
    ):
        self._today = today
        self.streak_length = streak_length
        self.adapter = RecordStoreAdapter(store)
        self.editor = EntryEditor(self.adapter, today=today)
        self.celebration = celebration or Celebration()
        self.gate = SessionGate(provider, on_enter=self._on_enter, on_leave=self._on_leave)
        self.views: DerivedViews = build_views(RecordMap(), today(), streak_length)
        self._observers: list[ViewsListener] = []
        self.adapter.add_listener(self._on_records_changed)

    def start(self) -> None:
        self.gate.start()

    def add_observer(self, observer: ViewsListener) -> None:
        self._observers.append(observer)

    @property
    def state(self) -> SessionState:
        return self.gate.state

    @property
    def session(self) -> Optional[Session]:
        return self.gate.session

    @property
    def records(self) -> RecordMap:
        return self.adapter.records

    def sign_in(self, email: str, password: str) -> Optional[Session]:
        return self.gate.submit_credentials(email, password)

    def sign_up(self, email: str, password: str) -> Optional[Session]:
        return self.gate.submit_credentials(email, password, sign_up=True)

    def sign_out(self) -> None:
        self.gate.sign_out()

    def report(self) -> str:
        email = self.session.email if self.session else None
        return plain_text_report(self.records, email, self._today())

    def _on_enter(self, session: Session) -> None:
        self.editor.reset()
        self.adapter.start(session.user_id)

    def _on_leave(self) -> None:
        self.adapter.stop()
        self.celebration.cancel()

    def _on_records_changed(self, records: RecordMap) -> None:
        self.views = build_views(records, self._today(), self.streak_length)
        if self.views.streak:
            self.celebration.trigger()
        for observer in list(self._observers):
            observer(self.views)
