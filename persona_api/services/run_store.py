# persona_api/services/run_store.py
import logging
import threading
from datetime import datetime
from typing import Dict, List, Optional, Protocol

from ..exceptions import RunNotFoundError
from ..models.test_runs import AudioChunk, Event, SurveyResponse, TestRun, now_ms

logger = logging.getLogger(__name__)


class TestRunStore(Protocol):
    """Storage interface for in-progress test runs."""

    def get(self, run_id: str) -> Optional[TestRun]: ...

    def get_or_create(self, run_id: str, user_id: str) -> TestRun: ...

    def append_event(self, run_id: str, user_id: str, event: Event) -> TestRun: ...

    def append_transcript(self, run_id: str, user_id: str, chunk: str) -> TestRun: ...

    def add_survey_response(
        self, run_id: str, user_id: str, response: SurveyResponse
    ) -> TestRun: ...

    def add_audio_chunk(
        self, run_id: str, user_id: str, chunk: AudioChunk
    ) -> TestRun: ...

    def mark_finalized(
        self,
        run_id: str,
        suite_id: Optional[str] = None,
        metadata: Optional[dict] = None,
    ) -> TestRun: ...

    def list_runs(self, user_id: Optional[str] = None) -> List[TestRun]: ...

    def current_run(self, user_id: str) -> Optional[TestRun]: ...


class InMemoryTestRunStore:
    """Process-lifetime run store keyed by run id."""

    def __init__(self):
        self._runs: Dict[str, TestRun] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._runs)

    def get(self, run_id: str) -> Optional[TestRun]:
        with self._lock:
            return self._runs.get(run_id)

    def _get_or_create_locked(self, run_id: str, user_id: str) -> TestRun:
        run = self._runs.get(run_id)
        if run is None:
            run = TestRun(id=run_id, user_id=user_id)
            self._runs[run_id] = run
            logger.info(f"Created test run {run_id} for user {user_id}")
        return run

    def get_or_create(self, run_id: str, user_id: str) -> TestRun:
        with self._lock:
            return self._get_or_create_locked(run_id, user_id)

    def append_event(self, run_id: str, user_id: str, event: Event) -> TestRun:
        with self._lock:
            run = self._get_or_create_locked(run_id, user_id)
            run.events.append(event)
            run.updated_at = datetime.now()
            return run

    def append_transcript(self, run_id: str, user_id: str, chunk: str) -> TestRun:
        with self._lock:
            run = self._get_or_create_locked(run_id, user_id)
            run.transcript += chunk
            run.updated_at = datetime.now()
            return run

    def add_survey_response(
        self, run_id: str, user_id: str, response: SurveyResponse
    ) -> TestRun:
        with self._lock:
            run = self._get_or_create_locked(run_id, user_id)
            run.survey_responses.append(response)
            run.updated_at = datetime.now()
            return run

    def add_audio_chunk(self, run_id: str, user_id: str, chunk: AudioChunk) -> TestRun:
        with self._lock:
            run = self._get_or_create_locked(run_id, user_id)
            run.audio_chunks.append(chunk)
            run.updated_at = datetime.now()
            return run

    def mark_finalized(
        self,
        run_id: str,
        suite_id: Optional[str] = None,
        metadata: Optional[dict] = None,
    ) -> TestRun:
        """Flag the run as finalized; the end time is recorded only once."""
        with self._lock:
            run = self._runs.get(run_id)
            if run is None:
                raise RunNotFoundError(run_id)
            if not run.finalized:
                run.finalized = True
                run.end_time = now_ms()
            if suite_id:
                run.suite_id = suite_id
            if metadata:
                run.metadata.update(metadata)
            run.updated_at = datetime.now()
            return run

    def list_runs(self, user_id: Optional[str] = None) -> List[TestRun]:
        with self._lock:
            runs = list(self._runs.values())
        if user_id is not None:
            runs = [run for run in runs if run.user_id == user_id]
        return runs

    def current_run(self, user_id: str) -> Optional[TestRun]:
        """Most recently updated run of the user that is not finalized yet."""
        active = [run for run in self.list_runs(user_id) if not run.finalized]
        if not active:
            return None
        return max(active, key=lambda run: run.updated_at)
