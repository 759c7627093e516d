import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from indentbars_core.config import StyleConfig
from indentbars_core.depth import DepthCalculator
from indentbars_core.highlight import INVALID_DEPTH, HighlightController, HighlightState
from indentbars_core.scheduler import CooperativeScheduler
from indentbars_core.styles import StyleRegistry
from indentbars_renderer.colors import context_from_theme
from indentbars_renderer.models import CellMetrics
from indentbars_renderer.themes import get_theme


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _controller(delay=0.1, offset=0):
    clock = FakeClock()
    scheduler = CooperativeScheduler(clock=clock)
    registry = StyleRegistry(context_from_theme(get_theme(None)), CellMetrics(10, 20))
    style = registry.initialize(StyleConfig())
    controller = HighlightController(registry, DepthCalculator(4, offset), scheduler, delay=delay)
    return clock, scheduler, style, controller


class SchedulerTests(unittest.TestCase):
    def test_runs_only_due_timers(self):
        clock = FakeClock()
        scheduler = CooperativeScheduler(clock=clock)
        fired = []
        scheduler.call_later(0.5, fired.append, "late")
        scheduler.call_later(0.1, fired.append, "early")
        self.assertEqual(scheduler.next_due(), 0.1)
        self.assertEqual(scheduler.run_due(0.2), 1)
        self.assertEqual(fired, ["early"])
        scheduler.run_due(1.0)
        self.assertEqual(fired, ["early", "late"])
        self.assertEqual(scheduler.pending(), [])

    def test_cancelled_timer_never_fires(self):
        scheduler = CooperativeScheduler(clock=FakeClock())
        fired = []
        handle = scheduler.call_later(0.0, fired.append, 1)
        handle.cancel()
        self.assertEqual(scheduler.run_due(5.0), 0)
        self.assertEqual(fired, [])

    def test_retarget_moves_timer(self):
        clock = FakeClock()
        scheduler = CooperativeScheduler(clock=clock)
        fired = []
        handle = scheduler.call_later(0.1, fired.append, "a")
        clock.now = 0.05
        same = scheduler.retarget(handle, 0.1, "b")
        self.assertIs(same, handle)
        self.assertAlmostEqual(handle.when, 0.15)
        scheduler.run_due(0.16)
        self.assertEqual(fired, ["b"])


class HighlightControllerTests(unittest.TestCase):
    def test_zero_delay_applies_immediately(self):
        _clock, scheduler, style, controller = _controller(delay=0)
        self.assertEqual(controller.on_cursor_move(8), 3)
        self.assertEqual(controller.applied_depth, 3)
        self.assertEqual(style.overlay.depth, 3)
        self.assertEqual(controller.state, HighlightState.IDLE)
        self.assertEqual(scheduler.pending(), [])

    def test_rapid_moves_coalesce_into_one_update(self):
        clock, scheduler, style, controller = _controller(delay=0.1)
        for width in (4, 8, 12):
            controller.on_cursor_move(width)
            clock.now += 0.02
        pending = scheduler.pending()
        self.assertEqual(len(pending), 1)
        self.assertEqual(pending[0].args, (4,))
        self.assertEqual(controller.state, HighlightState.PENDING_UPDATE)
        self.assertIsNone(style.overlay)

        self.assertEqual(scheduler.run_due(0.1), 0)
        scheduler.run_due(0.2)
        self.assertEqual(style.overlay.depth, 4)
        self.assertEqual(controller.applied_depth, 4)
        self.assertEqual(controller.state, HighlightState.IDLE)

    def test_each_move_pushes_the_update_back(self):
        clock, scheduler, _style, controller = _controller(delay=0.1)
        controller.on_cursor_move(4)
        clock.now = 0.08
        controller.on_cursor_move(8)
        self.assertEqual(scheduler.run_due(0.15), 0)
        self.assertEqual(scheduler.run_due(0.2), 1)
        self.assertEqual(controller.applied_depth, 3)

    def test_unchanged_target_schedules_nothing(self):
        _clock, scheduler, _style, controller = _controller(delay=0.1)
        controller.on_cursor_move(5)
        scheduler.run_due(1.0)
        self.assertEqual(controller.on_cursor_move(6), 2)
        self.assertEqual(scheduler.pending(), [])

    def test_depth_zero_clears_overlay(self):
        _clock, _scheduler, style, controller = _controller(delay=0, offset=4)
        controller.on_cursor_move(8)
        self.assertIsNotNone(style.overlay)
        self.assertEqual(controller.on_cursor_move(2), 0)
        self.assertIsNone(style.overlay)
        self.assertEqual(controller.applied_depth, 0)

    def test_force_refresh_reapplies_same_depth(self):
        _clock, _scheduler, style, controller = _controller(delay=0)
        controller.on_cursor_move(8)
        first = style.overlay
        controller.force_refresh()
        self.assertEqual(controller.applied_depth, INVALID_DEPTH)
        controller.on_cursor_move(8)
        self.assertIsNot(style.overlay, first)
        self.assertEqual(style.overlay.depth, 3)

    def test_clear_cancels_pending_update(self):
        _clock, scheduler, style, controller = _controller(delay=0.1)
        controller.on_cursor_move(8)
        controller.clear()
        self.assertEqual(scheduler.run_due(1.0), 0)
        self.assertIsNone(style.overlay)
        self.assertEqual(controller.state, HighlightState.IDLE)


if __name__ == "__main__":
    unittest.main()
