"""
Unit tests for FeedbackSubmissionFlow.

The store is a MagicMock so each test can check whether a write happened.
"""
from unittest.mock import MagicMock

import pytest

from app.services.auth.context import SessionContext
from app.services.feedback import (
    AuthRequiredError,
    FeedbackForm,
    FeedbackStore,
    FeedbackSubmissionFlow,
    ValidationError,
)
from app.services.store import StoreWriteError


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def session() -> SessionContext:
    return SessionContext(
        user_id="user-1",
        user_name="Reader",
        phone_number="9876543210",
        user_type="user",
    )


@pytest.fixture
def store() -> MagicMock:
    store = MagicMock(spec=FeedbackStore)
    store.submit.return_value = "fb-1"
    return store


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def flow(store, clock) -> FeedbackSubmissionFlow:
    return FeedbackSubmissionFlow(store, confirmation_seconds=3, clock=clock)


class TestSubmitValidation:
    def test_requires_session(self, flow, store):
        with pytest.raises(AuthRequiredError):
            flow.submit(None, FeedbackForm(feedback="Hello"))

        store.submit.assert_not_called()

    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_empty_text_never_reaches_store(self, flow, store, session, text):
        form = FeedbackForm(feedback=text)

        with pytest.raises(ValidationError, match="empty feedback"):
            flow.submit(session, form)

        store.submit.assert_not_called()
        assert form.error

    @pytest.mark.parametrize("rating", [0, 6, -1, True, "4", 4.5])
    def test_bad_rating_rejected(self, flow, store, session, rating):
        form = FeedbackForm(feedback="ok", rating=rating)

        with pytest.raises(ValidationError):
            flow.submit(session, form)

        store.submit.assert_not_called()
        assert form.feedback == "ok"

    def test_unknown_category_rejected(self, flow, store, session):
        with pytest.raises(ValidationError):
            flow.submit(session, FeedbackForm(feedback="ok", category="sports"))

        store.submit.assert_not_called()


class TestSubmitSuccess:
    def test_writes_record_with_session_identity(self, flow, store, session):
        form = FeedbackForm(feedback="  Loving the new layout  ", rating=4, category="feature")

        feedback_id = flow.submit(session, form)

        assert feedback_id == "fb-1"
        store.submit.assert_called_once_with(
            {
                "userId": "user-1",
                "userName": "Reader",
                "phoneNumber": "9876543210",
                "feedback": "Loving the new layout",
                "rating": 4,
                "category": "feature",
            }
        )

    def test_defaults_rating_and_category(self, flow, store, session):
        flow.submit(session, FeedbackForm(feedback="Hi", rating=None, category=None))

        record = store.submit.call_args.args[0]
        assert record["rating"] == 5
        assert record["category"] == "general"

    def test_form_reset_after_success(self, flow, session):
        form = FeedbackForm(feedback="Hi", rating=2, category="bug", error="old error")

        flow.submit(session, form)

        assert form.feedback == ""
        assert form.rating == 5
        assert form.category == "general"
        assert form.error is None

    def test_confirmation_window(self, flow, session, clock):
        form = FeedbackForm(feedback="Hi")

        flow.submit(session, form)

        assert form.state(clock.now) == "confirmed"
        assert form.state(clock.now + 2.9) == "confirmed"
        assert form.state(clock.now + 3) == "idle"

    def test_fresh_form_is_idle(self):
        assert FeedbackForm().state(0) == "idle"


class TestSubmitStoreFailure:
    def test_store_failure_keeps_input(self, flow, store, session, clock):
        store.submit.side_effect = StoreWriteError("backend down")
        form = FeedbackForm(feedback="Broken link", rating=2, category="bug")

        with pytest.raises(StoreWriteError):
            flow.submit(session, form)

        assert form.feedback == "Broken link"
        assert form.rating == 2
        assert form.category == "bug"
        assert form.error
        assert form.state(clock.now) == "idle"
