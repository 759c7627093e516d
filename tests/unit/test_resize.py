import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from indentbars_core.config import StyleConfig
from indentbars_core.depth import DepthCalculator
from indentbars_core.highlight import INVALID_DEPTH, HighlightController
from indentbars_core.resize import ResizeCoordinator
from indentbars_core.scheduler import CooperativeScheduler
from indentbars_core.styles import StyleRegistry
from indentbars_renderer.colors import context_from_theme
from indentbars_renderer.models import CellMetrics
from indentbars_renderer.stipple import rotate_row
from indentbars_renderer.themes import get_theme


def _setup():
    registry = StyleRegistry(context_from_theme(get_theme(None)), CellMetrics(10, 20))
    style = registry.initialize(StyleConfig())
    controller = HighlightController(registry, DepthCalculator(4), CooperativeScheduler(), delay=0)
    return registry, style, controller, ResizeCoordinator(registry, controller)


class ResizeTests(unittest.TestCase):
    def test_same_geometry_is_a_no_op(self):
        _registry, style, _controller, resizer = _setup()
        before = style.bitmap
        self.assertFalse(resizer.on_resize(CellMetrics(10, 20, window_left=20)))
        self.assertIs(style.bitmap, before)

    def test_window_offset_rotates_tiles(self):
        _registry, style, _controller, resizer = _setup()
        plain_row = style.bitmap.row(0)
        self.assertTrue(resizer.on_resize(CellMetrics(10, 20, window_left=13)))
        self.assertEqual(style.bitmap.row(0), rotate_row(plain_row, 10, 3))

    def test_font_change_keeps_face_identity(self):
        registry, style, _controller, resizer = _setup()
        faces = [registry.face_for(style, d) for d in (1, 2, 5)]
        self.assertTrue(resizer.on_resize(CellMetrics(14, 28)))
        for face in faces:
            self.assertIs(registry.face_for(style, face.depth), face)
            self.assertIs(face.stipple, style.bitmap)
            self.assertEqual(face.stipple.width, 14)
        self.assertEqual(len(style.bitmap.bytes), 28 * 2)

    def test_resize_forces_highlight_refresh(self):
        _registry, _style, controller, resizer = _setup()
        controller.on_cursor_move(8)
        self.assertEqual(controller.applied_depth, 3)
        resizer.on_resize(CellMetrics(12, 24))
        self.assertEqual(controller.applied_depth, INVALID_DEPTH)

    def test_degenerate_metrics_ignored(self):
        _registry, style, _controller, resizer = _setup()
        before = style.bitmap
        with self.assertLogs("indentbars.resize", level="WARNING"):
            self.assertFalse(resizer.on_resize(CellMetrics(0, 20)))
        self.assertIs(style.bitmap, before)


if __name__ == "__main__":
    unittest.main()
