import pytest

from app.events import TYPE_RULES, EventType, normalize_event_type


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("VMD_motion", "MotionDetection"),
        ("MotionDetection", "MotionDetection"),
        ("videoloss", "VideoLoss"),
        ("VideoLoss", "VideoLoss"),
        ("tamperdetection", "TamperDetection"),
        ("shelteralarm", "TamperDetection"),
        ("diskfull", "StorageFailure"),
        ("diskerror", "StorageFailure"),
        ("linedetection", "LineCrossing"),
        ("fielddetection_crossing", "LineCrossing"),
        ("intrusion", "IntrusionDetection"),
        ("facedetection", "FaceDetection"),
        ("IO", "IOAlarm"),
        ("inputalarm", "IOAlarm"),
    ],
)
def test_maps_known_types(raw, expected):
    assert normalize_event_type(raw) == expected


def test_unknown_type_keeps_lowercased_raw():
    assert normalize_event_type("VMD") == "UnknownEvent_vmd"
    assert normalize_event_type("PIR") == "UnknownEvent_pir"


def test_empty_type_is_still_tagged():
    assert normalize_event_type("") == "UnknownEvent_"


def test_first_matching_rule_wins():
    # "motion" precedes "alarm"
    assert normalize_event_type("motionalarm") == "MotionDetection"
    # "videoloss" precedes "io"/"alarm"
    assert normalize_event_type("videolossalarm") == "VideoLoss"
    # "shelteralarm" is tamper, not IO
    assert normalize_event_type("ShelterAlarm") == "TamperDetection"
    # "line" precedes "intrusion"
    assert normalize_event_type("lineintrusion") == "LineCrossing"


def test_alarm_rule_shadows_connection():
    assert normalize_event_type("connectionalarm") == "IOAlarm"
    # "connection" contains "io"
    assert normalize_event_type("connection") == "IOAlarm"
    assert normalize_event_type("regionentrance") == "IOAlarm"


def test_is_deterministic():
    samples = ["VMD", "videoloss", "connectionalarm", "FaceDetection", "weird"]
    assert [normalize_event_type(s) for s in samples] == [normalize_event_type(s) for s in samples]


def test_rule_table_order():
    assert [rule.event_type for rule in TYPE_RULES] == [
        EventType.MOTION,
        EventType.VIDEO_LOSS,
        EventType.TAMPER,
        EventType.STORAGE_FAILURE,
        EventType.LINE_CROSSING,
        EventType.INTRUSION,
        EventType.FACE,
        EventType.IO_ALARM,
        EventType.DEVICE_CONNECTION,
    ]


def test_custom_rules():
    rules = TYPE_RULES[:1]
    assert normalize_event_type("videoloss", rules=rules) == "UnknownEvent_videoloss"
