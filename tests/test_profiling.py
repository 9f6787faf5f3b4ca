import pytest

from emerald2d.errors import EmeraldError
from emerald2d.profiling import Profile, ProfileCache, Profiler, ProfileSettings


def test_default_frame_limit():
    assert ProfileSettings().frame_limit == 600
    assert ProfileCache().settings.frame_limit == 600


def test_start_and_finish_returns_elapsed():
    cache = ProfileCache()
    cache.start_frame("game_loop", 1.0)
    assert cache.finish_frame("game_loop", 3.5) == 3.5 - 1.0
    assert list(cache.profiles["game_loop"].frames) == [(1.0, 3.5)]


def test_double_start_raises():
    cache = ProfileCache()
    cache.start_frame("loop", 0.0)
    with pytest.raises(EmeraldError, match="has already been started"):
        cache.start_frame("loop", 1.0)


def test_finish_without_start_raises():
    cache = ProfileCache()
    with pytest.raises(EmeraldError, match="was never started"):
        cache.finish_frame("loop", 1.0)


def test_double_finish_raises():
    cache = ProfileCache()
    cache.start_frame("loop", 0.0)
    cache.finish_frame("loop", 1.0)
    with pytest.raises(EmeraldError, match="was never started"):
        cache.finish_frame("loop", 2.0)


def test_restart_after_finish_is_allowed():
    cache = ProfileCache()
    cache.start_frame("loop", 0.0)
    cache.finish_frame("loop", 1.0)
    cache.start_frame("loop", 2.0)
    cache.finish_frame("loop", 4.0)
    assert list(cache.profiles["loop"].frames) == [(2.0, 4.0), (0.0, 1.0)]


def test_profile_drops_oldest_past_limit():
    settings = ProfileSettings(frame_limit=4)
    profile = Profile()
    frames = [(float(i), float(i) + 0.5) for i in range(10)]
    for frame in frames:
        profile.add_frame(frame, settings)
    assert len(profile.frames) == settings.frame_limit - 1
    assert profile.frames[0] == frames[-1]
    assert list(profile.frames) == list(reversed(frames))[: settings.frame_limit - 1]


def test_profiler_uses_captured_time():
    cache = ProfileCache()
    Profiler(cache, "draw", 10.0).start_frame()
    elapsed = Profiler(cache, "draw", 12.0).finish_frame()
    assert elapsed == 12.0 - 10.0
    assert list(cache.profiles["draw"].frames) == [(10.0, 12.0)]


def test_profiler_double_start_raises():
    cache = ProfileCache()
    profiler = Profiler(cache, "draw", 0.0)
    profiler.start_frame()
    with pytest.raises(EmeraldError):
        profiler.start_frame()