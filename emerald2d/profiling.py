"""Named timing profiles recorded frame by frame."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from .errors import EmeraldError

Frame = tuple[float, float]


@dataclass
class ProfileSettings:
    """How many frames to keep per profile before dropping the oldest."""

    # Roughly ten seconds of frame data.
    frame_limit: int = 600


@dataclass
class Profile:
    """Recorded (start, finish) frames, newest first."""

    frames: deque[Frame] = field(default_factory=deque)

    def add_frame(self, frame: Frame, settings: ProfileSettings) -> None:
        self.frames.appendleft(frame)
        if len(self.frames) >= settings.frame_limit:
            self.frames.pop()


class ProfileCache:
    """Holds every profile and the ones currently being timed."""

    def __init__(self, settings: ProfileSettings | None = None) -> None:
        self.settings = settings if settings is not None else ProfileSettings()
        self.profiles: dict[str, Profile] = {}
        # name -> (start, has_ended)
        self._in_progress: dict[str, tuple[float, bool]] = {}

    def start_frame(self, profile_name: str, now: float) -> None:
        """Begin timing a frame of the named profile."""
        name = str(profile_name)
        if name in self._in_progress:
            raise EmeraldError(f"Profile Error: {name} has already been started.")
        self.profiles.setdefault(name, Profile())
        self._in_progress[name] = (now, False)

    def finish_frame(self, profile_name: str, now: float) -> float:
        """Finish timing the named profile and return the elapsed time."""
        name = str(profile_name)
        in_progress = self._in_progress.get(name)
        if in_progress is None:
            raise EmeraldError(f"Profile Error: {name} was never started.")

        start, has_ended = in_progress
        if has_ended:
            raise EmeraldError(f"Profile Error: {name} has already ended.")
        self._in_progress[name] = (start, True)

        profile = self.profiles.get(name)
        if profile is None:
            raise EmeraldError(f"Profile Error: Profile {name} does not exist.")

        profile.add_frame((start, now), self.settings)
        del self._in_progress[name]
        return now - start


class Profiler:
    """Times one named profile against a time captured at creation."""

    def __init__(self, profile_cache: ProfileCache, profile_name: str, now: float) -> None:
        self.profile_cache = profile_cache
        self.profile_name = str(profile_name)
        self.now = now

    def start_frame(self) -> None:
        self.profile_cache.start_frame(self.profile_name, self.now)

    def finish_frame(self) -> float:
        return self.profile_cache.finish_frame(self.profile_name, self.now)