from ai_common_notify.events import classify
from ai_common_notify.models import EventPayload


def _classify(**fields):
    return classify(EventPayload.from_raw(fields))


# --- explicit event type ---


def test_explicit_event_type_wins_over_tool_fields():
    assert _classify(event_type="Stop", tool_name="Bash", tool_response={}) == "Stop"


def test_explicit_unknown_event_type_is_passed_through():
    assert _classify(event_type="BeforeCommit") == "BeforeCommit"


def test_empty_event_type_falls_through_to_rules():
    assert _classify(event_type="", session_id="abc") == "Stop"


# --- tool events ---


def test_tool_name_without_response_is_pre_tool_use():
    assert _classify(tool_name="Bash", tool_input={"command": "ls"}) == "PreToolUse"


def test_tool_name_with_response_is_post_tool_use():
    assert _classify(tool_name="Read", tool_response={"ok": True}) == "PostToolUse"


def test_falsy_tool_response_still_counts_as_present():
    assert _classify(tool_name="Bash", tool_response="") == "PostToolUse"
    assert _classify(tool_name="Bash", tool_response=0) == "PostToolUse"


def test_tool_event_beats_session_id():
    assert _classify(tool_name="Edit", session_id="s1") == "PreToolUse"


# --- notification ---


def test_notification_type_is_notification():
    assert _classify(notification_type="idle") == "Notification"


def test_title_and_message_is_notification():
    assert _classify(title="Hi", message="There") == "Notification"


def test_title_alone_is_not_notification():
    assert _classify(title="Hi") is None


# --- stop ---


def test_session_id_alone_is_stop():
    assert _classify(session_id="abc123") == "Stop"


# --- undetermined ---


def test_empty_payload_is_undetermined():
    assert _classify() is None


def test_unrelated_fields_are_undetermined():
    assert _classify(foo="bar", count=3) is None


def test_classify_is_idempotent():
    payload = EventPayload.from_raw({"tool_name": "Write", "tool_input": {"file_path": "/x"}})
    assert classify(payload) == classify(payload) == "PreToolUse"


def test_classify_does_not_modify_payload():
    payload = EventPayload.from_raw({"tool_name": "Bash"})
    before = payload.model_dump()
    classify(payload)
    assert payload.model_dump() == before
