from .mocks import FakePagedServer, MockTransport, RecordingSession

__all__ = [
    "FakePagedServer",
    "MockTransport",
    "RecordingSession",
]
