"""Unit tests for VoiceControlService."""

import threading

import pytest

from voicelap.stt import MockRecognizer
from voicelap.voice import VoiceControlService, VoiceStatus


@pytest.fixture
def recognizer() -> MockRecognizer:
    """Controllable recognizer."""
    return MockRecognizer()


@pytest.fixture
def sleeps() -> list[float]:
    """Recorded backoff sleeps."""
    return []


@pytest.fixture
def service(recognizer: MockRecognizer, sleeps: list[float]) -> VoiceControlService:
    """Service with a recorded, non-blocking sleep."""
    return VoiceControlService(
        recognizer,
        init_timeout_seconds=1.0,
        restart_backoff_seconds=2.0,
        sleep=sleeps.append,
    )


class TestInitialize:
    """Tests for recognizer initialization."""

    def test_initial_status(self, service: VoiceControlService) -> None:
        """Test the service starts disabled."""
        assert service.status == VoiceStatus.DISABLED
        assert service.is_available is False

    def test_success(self, service: VoiceControlService) -> None:
        """Test a successful initialize makes the service ready."""
        assert service.initialize() is True
        assert service.status == VoiceStatus.READY
        assert service.is_available is True

    def test_failure(self, service: VoiceControlService, recognizer: MockRecognizer) -> None:
        """Test an initialize error makes voice unavailable."""
        recognizer.set_init_error(RuntimeError("model missing"))
        assert service.initialize() is False
        assert service.status == VoiceStatus.UNAVAILABLE
        assert service.status_message == "Speech service unavailable: model missing"

    def test_timeout(self, recognizer: MockRecognizer) -> None:
        """Test a slow initialize times out."""
        recognizer.set_init_delay(0.5)
        service = VoiceControlService(recognizer, init_timeout_seconds=0.05)
        assert service.initialize() is False
        assert service.status == VoiceStatus.UNAVAILABLE
        assert service.status_message == "Speech service timed out"


class TestListening:
    """Tests for starting and stopping the recognizer."""

    def test_start_requires_initialize(self, service: VoiceControlService) -> None:
        """Test listening cannot start before initialization."""
        assert service.start_listening() is False
        assert service.status == VoiceStatus.DISABLED

    def test_start_and_stop(self, service: VoiceControlService, recognizer: MockRecognizer) -> None:
        """Test the listening round trip."""
        service.initialize()
        assert service.start_listening() is True
        assert service.is_listening is True
        assert recognizer.is_listening is True

        service.stop_listening()
        assert service.status == VoiceStatus.READY
        assert service.status_message == "Voice control off"
        assert recognizer.is_listening is False

    def test_start_twice(self, service: VoiceControlService, recognizer: MockRecognizer) -> None:
        """Test a second start is a no-op."""
        service.initialize()
        service.start_listening()
        assert service.start_listening() is True
        assert recognizer.start_count == 1

    def test_permission_denied(
        self, service: VoiceControlService, recognizer: MockRecognizer
    ) -> None:
        """Test a refused microphone makes voice unavailable."""
        recognizer.set_start_error(PermissionError("denied"))
        service.initialize()
        assert service.start_listening() is False
        assert service.status == VoiceStatus.UNAVAILABLE
        assert service.status_message == "Microphone permission denied"

    def test_enable_retries_after_unavailable(
        self, service: VoiceControlService, recognizer: MockRecognizer
    ) -> None:
        """Test enabling an unavailable service initializes again."""
        recognizer.set_init_error(RuntimeError("busy"))
        service.initialize()
        recognizer.set_init_error(None)

        assert service.enable() is True
        assert service.is_listening is True
        assert recognizer.initialize_count == 2

    def test_enable_when_ready_does_not_reinitialize(
        self, service: VoiceControlService, recognizer: MockRecognizer
    ) -> None:
        """Test enabling a ready service only starts listening."""
        service.initialize()
        assert service.enable() is True
        assert recognizer.initialize_count == 1


class TestDrain:
    """Tests for transcript delivery."""

    def test_delivery_order(self, service: VoiceControlService, recognizer: MockRecognizer) -> None:
        """Test transcripts are drained in arrival order."""
        service.initialize()
        service.start_listening()
        recognizer.emit("start")
        recognizer.emit("lap")
        recognizer.emit("stop")
        assert service.drain() == ["start", "lap", "stop"]
        assert service.drain() == []

    def test_json_payloads(self, service: VoiceControlService, recognizer: MockRecognizer) -> None:
        """Test engine JSON is decoded and malformed payloads dropped."""
        service.initialize()
        service.start_listening()
        recognizer.emit('{"text": "lap"}')
        recognizer.emit('{"text": ')
        recognizer.emit('{"partial": "la"}')
        recognizer.emit("reset")
        assert service.drain() == ["lap", "reset"]

    def test_cross_thread_delivery(
        self, service: VoiceControlService, recognizer: MockRecognizer
    ) -> None:
        """Test results from the engine thread are queued for the consumer."""
        service.initialize()
        service.start_listening()
        thread = threading.Thread(target=lambda: [recognizer.emit(w) for w in ("go", "stop")])
        thread.start()
        thread.join()
        assert service.drain() == ["go", "stop"]

    def test_error_restarts_once(
        self, service: VoiceControlService, recognizer: MockRecognizer, sleeps: list[float]
    ) -> None:
        """Test a runtime error triggers a single restart with backoff."""
        service.initialize()
        service.start_listening()
        recognizer.emit("start")
        recognizer.fail(RuntimeError("stream closed"))

        assert service.drain() == ["start"]
        assert service.wait_for_restart(timeout=1.0) is True
        assert sleeps == [2.0]
        assert recognizer.initialize_count == 2
        assert service.is_listening is True

    def test_failed_restart_is_unavailable(
        self, service: VoiceControlService, recognizer: MockRecognizer, sleeps: list[float]
    ) -> None:
        """Test a restart that fails leaves voice unavailable without retrying."""
        service.initialize()
        service.start_listening()
        recognizer.set_init_error(RuntimeError("no model"))
        recognizer.fail(RuntimeError("stream closed"))

        service.drain()
        assert service.wait_for_restart(timeout=1.0) is True
        assert service.status == VoiceStatus.UNAVAILABLE
        assert recognizer.initialize_count == 2

        service.drain()
        assert recognizer.initialize_count == 2
        assert sleeps == [2.0]

    def test_restart_does_not_block_drain(self, recognizer: MockRecognizer) -> None:
        """Test drain returns while the restart backoff is still running."""
        release = threading.Event()
        service = VoiceControlService(
            recognizer, init_timeout_seconds=1.0, sleep=lambda _s: release.wait(2.0)
        )
        service.initialize()
        service.start_listening()
        recognizer.fail(RuntimeError("stream closed"))

        assert service.drain() == []
        assert service.is_restarting is True
        assert service.is_listening is False

        release.set()
        assert service.wait_for_restart(timeout=2.0) is True
        assert service.is_listening is True

    def test_stop_during_restart_stays_off(self, recognizer: MockRecognizer) -> None:
        """Test turning voice off mid-restart keeps the recognizer quiet."""
        release = threading.Event()
        service = VoiceControlService(
            recognizer, init_timeout_seconds=1.0, sleep=lambda _s: release.wait(2.0)
        )
        service.initialize()
        service.start_listening()
        recognizer.fail(RuntimeError("stream closed"))
        service.drain()

        service.stop_listening()
        release.set()
        assert service.wait_for_restart(timeout=2.0) is True
        assert service.status == VoiceStatus.READY
        assert recognizer.is_listening is False
