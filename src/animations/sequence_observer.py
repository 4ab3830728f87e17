"""
Word Sequence Observer

Records the (word, phase) stream a rotating text controller publishes and
checks it against expectations: order, wrap-around and cadence. Used by
tests and for diagnosing a live rotation.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from models.enums import AnimationPhase, EventType
from models.events import PhaseChangedEvent, RotationStartedEvent
from services.event_bus import EventBus
from timing.time_source_interface import ITimeSource


@dataclass(frozen=True)
class Observation:
    word: str
    phase: AnimationPhase
    timestamp_ms: float


@dataclass
class SequenceReport:
    valid: bool
    issues: List[str]
    actual: List[str]
    expected: List[str]


@dataclass
class CyclingReport:
    valid: bool
    issues: List[str]
    wrap_count: int


@dataclass
class TimingReport:
    valid: bool
    issues: List[str]
    intervals: List[float] = field(default_factory=list)
    average_interval: float = 0.0


class WordSequenceObserver:
    """
    Subscribes to rotation events and keeps an ordered observation log.

    An observation is recorded only when the word or the phase differs from
    the previous one.

    Example:
        observer = WordSequenceObserver(bus, time_source)
        observer.start()
        handle = controller.start(words)
        time_source.advance(12_000)
        report = observer.validate_cycling(words)
    """

    def __init__(self, event_bus: EventBus, time_source: ITimeSource, handle_id: Optional[int] = None):
        self.event_bus = event_bus
        self.time_source = time_source
        self.handle_id = handle_id
        self._observations: List[Observation] = []
        self._observing = False

    # ------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------

    def start(self) -> None:
        if self._observing:
            return
        self._observing = True
        self._observations = []
        self.event_bus.subscribe(EventType.ROTATION_STARTED, self._on_started, filter_fn=self._matches)
        self.event_bus.subscribe(EventType.PHASE_CHANGED, self._on_phase_changed, filter_fn=self._matches)

    def stop(self) -> None:
        if not self._observing:
            return
        self._observing = False
        self.event_bus.unsubscribe(EventType.ROTATION_STARTED, self._on_started)
        self.event_bus.unsubscribe(EventType.PHASE_CHANGED, self._on_phase_changed)

    def _matches(self, event) -> bool:
        return self.handle_id is None or event.handle_id == self.handle_id

    def _on_started(self, event: RotationStartedEvent) -> None:
        if event.words:
            self._record(event.words[0], AnimationPhase.VISIBLE, self.time_source.now_ms())

    def _on_phase_changed(self, event: PhaseChangedEvent) -> None:
        self._record(event.word, event.phase, event.timestamp_ms)

    def _record(self, word: str, phase: AnimationPhase, timestamp_ms: float) -> None:
        last = self._observations[-1] if self._observations else None
        if last is None or last.word != word or last.phase != phase:
            self._observations.append(Observation(word, phase, timestamp_ms))

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    def observations(self) -> List[Observation]:
        return list(self._observations)

    def word_sequence(self) -> List[str]:
        """Distinct consecutive words, blanks dropped"""
        sequence: List[str] = []
        for obs in self._observations:
            if not obs.word.strip():
                continue
            if not sequence or sequence[-1] != obs.word:
                sequence.append(obs.word)
        return sequence

    def entering_words(self) -> List[str]:
        return [o.word for o in self._observations if o.phase == AnimationPhase.ENTERING]

    def timing_intervals(self) -> List[float]:
        """Milliseconds between consecutive ENTERING observations"""
        stamps = [o.timestamp_ms for o in self._observations if o.phase == AnimationPhase.ENTERING]
        return [b - a for a, b in zip(stamps, stamps[1:])]

    # ------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------

    def validate_sequence(self, expected_words: Sequence[str], cycles: int = 1) -> SequenceReport:
        actual = self.word_sequence()
        expected = list(expected_words) * cycles
        issues: List[str] = []

        if len(actual) < len(expected):
            issues.append(f"Sequence too short: expected {len(expected)}, got {len(actual)}")

        for i, (want, got) in enumerate(zip(expected, actual)):
            if want != got:
                issues.append(f'Sequence mismatch at position {i}: expected "{want}", got "{got}"')

        blanks = sum(1 for o in self._observations if not o.word.strip())
        if blanks:
            issues.append(f"Found {blanks} empty words in sequence")

        return SequenceReport(valid=not issues, issues=issues, actual=actual, expected=expected)

    def validate_cycling(self, expected_words: Sequence[str]) -> CyclingReport:
        """Check that the rotation wraps from the last word back to the first."""
        sequence = self.word_sequence()
        issues: List[str] = []

        if len(expected_words) < 2:
            return CyclingReport(valid=True, issues=[], wrap_count=0)

        if len(sequence) < len(expected_words) + 1:
            issues.append("Sequence too short to validate cycling")
            return CyclingReport(valid=False, issues=issues, wrap_count=0)

        first, last = expected_words[0], expected_words[-1]
        wraps = sum(1 for a, b in zip(sequence, sequence[1:]) if a == last and b == first)
        if wraps == 0:
            issues.append("No cycle transitions detected - rotation may not be looping correctly")

        for a, b in zip(sequence, sequence[1:]):
            if a == last and b != first:
                issues.append(f'After "{last}" expected "{first}", got "{b}"')

        return CyclingReport(valid=not issues, issues=issues, wrap_count=wraps)

    def validate_timing(self, expected_interval_ms: float, tolerance_ms: float = 200) -> TimingReport:
        intervals = self.timing_intervals()
        if not intervals:
            return TimingReport(valid=False, issues=["No timing intervals recorded"])

        average = sum(intervals) / len(intervals)
        issues: List[str] = []
        if abs(average - expected_interval_ms) > tolerance_ms:
            issues.append(
                f"Average interval {average:.0f}ms differs from expected "
                f"{expected_interval_ms:.0f}ms by more than {tolerance_ms:.0f}ms"
            )

        outliers = [i for i in intervals if abs(i - expected_interval_ms) > tolerance_ms * 2]
        if len(outliers) > len(intervals) * 0.1:
            issues.append(
                f"Too many timing outliers: {len(outliers)}/{len(intervals)} intervals deviate significantly"
            )

        return TimingReport(valid=not issues, issues=issues, intervals=intervals, average_interval=average)
