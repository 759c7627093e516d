import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from indentbars_core.config import (
    UNSET,
    IndentBarsConfig,
    Inherit,
    StyleConfig,
    StyleOverrides,
    config_from_mapping,
    resolve_style_config,
    validate_config,
)
from indentbars_renderer.errors import ConfigError
from indentbars_renderer.models import ColorConfig, PatternConfig
from indentbars_renderer.themes import DEFAULT_THEME_NAME


class ConfigTests(unittest.TestCase):
    def test_defaults_when_empty(self):
        cfg = config_from_mapping({})
        self.assertIsInstance(cfg, IndentBarsConfig)
        self.assertEqual(cfg.theme, DEFAULT_THEME_NAME)
        self.assertEqual(cfg.style.pattern.width_frac, 0.4)
        self.assertEqual(cfg.style.pattern.pattern, ".")
        self.assertEqual(cfg.style.color.ref, "highlight")
        self.assertTrue(cfg.display_on_blank_lines)
        self.assertEqual(cfg.no_stipple_char, "│")

    def test_partial_sections_keep_defaults(self):
        cfg = config_from_mapping({"style": {"pattern": {"pattern": ".  .", "zigzag": 0.1}}})
        self.assertEqual(cfg.style.pattern.pattern, ".  .")
        self.assertEqual(cfg.style.pattern.zigzag, 0.1)
        self.assertEqual(cfg.style.pattern.pad_frac, 0.1)

    def test_palette_lists_become_tuples(self):
        cfg = config_from_mapping({"style": {"depth_palette": {"regexp": None, "colors": ["red", "blue"]}}})
        self.assertEqual(cfg.style.depth_palette.colors, ("red", "blue"))

    def test_sections_can_be_disabled(self):
        cfg = config_from_mapping({"style": {"depth_palette": None, "highlight": None}})
        self.assertIsNone(cfg.style.depth_palette)
        self.assertIsNone(cfg.style.highlight)

    def test_color_cannot_be_disabled(self):
        with self.assertRaises(ConfigError):
            config_from_mapping({"style": {"color": None}})

    def test_fraction_out_of_range(self):
        with self.assertRaises(ConfigError):
            config_from_mapping({"style": {"pattern": {"width_frac": 1.5}}})
        with self.assertRaises(ConfigError):
            config_from_mapping({"style": {"pattern": {"zigzag": -2}}})

    def test_empty_pattern_rejected(self):
        with self.assertRaises(ConfigError):
            config_from_mapping({"style": {"pattern": {"pattern": ""}}})

    def test_unknown_keys_rejected(self):
        with self.assertRaises(ConfigError):
            config_from_mapping({"colour": "red"})
        with self.assertRaises(ConfigError):
            config_from_mapping({"style": {"pattern": {"thickness": 2}}})
        with self.assertRaises(ConfigError):
            config_from_mapping({"style": {"glow": True}})

    def test_tint_needs_blend(self):
        with self.assertRaises(ConfigError):
            config_from_mapping({"style": {"tint": "red"}})
        cfg = config_from_mapping({"style": {"tint": "red", "tint_blend": 0.3}})
        self.assertEqual(cfg.style.tint_blend, 0.3)

    def test_non_numeric_settings_are_config_errors(self):
        for raw in (
            {"depth_update_delay": "soon"},
            {"prefetch_depths": "many"},
            {"prefetch_depths": 2.5},
            {"style": {"tint": "red", "tint_blend": "half"}},
        ):
            with self.assertRaises(ConfigError):
                config_from_mapping(raw)

    def test_scalar_settings_validated(self):
        with self.assertRaises(ConfigError):
            config_from_mapping({"no_stipple_char": "||"})
        with self.assertRaises(ConfigError):
            config_from_mapping({"spacing_override": 0})
        with self.assertRaises(ConfigError):
            config_from_mapping({"depth_update_delay": -1})
        with self.assertRaises(ConfigError):
            config_from_mapping({"starting_column": -2})


class InheritanceTests(unittest.TestCase):
    def test_unset_fields_come_from_parent(self):
        parent = StyleConfig(pattern=PatternConfig(pattern=". ."))
        child = resolve_style_config(StyleOverrides(), parent)
        self.assertEqual(child, parent)

    def test_own_value_wins(self):
        parent = StyleConfig()
        own = ColorConfig(ref="#FF0000", face_bg=False, blend=None)
        child = resolve_style_config(StyleOverrides(color=own), parent)
        self.assertEqual(child.color, own)
        self.assertEqual(child.pattern, parent.pattern)

    def test_partial_inherit_merges_over_parent_section(self):
        parent = StyleConfig(color=ColorConfig(ref="shadow", face_bg=False, blend=0.6))
        child = resolve_style_config(StyleOverrides(color=Inherit({"blend": 0.2})), parent)
        self.assertEqual(child.color, ColorConfig(ref="shadow", face_bg=False, blend=0.2))

    def test_partial_inherit_rejects_unknown_keys(self):
        with self.assertRaises(ConfigError):
            resolve_style_config(StyleOverrides(color=Inherit({"shade": 1})), StyleConfig())

    def test_child_can_disable_parent_section(self):
        child = resolve_style_config(StyleOverrides(highlight=None), StyleConfig())
        self.assertIsNone(child.highlight)

    def test_alt_styles_from_mapping(self):
        cfg = config_from_mapping(
            {
                "style": {"color": {"ref": "shadow", "blend": 0.5}},
                "alt_styles": {
                    "dim": {
                        "color": {"inherit": True, "blend": 0.2},
                        "pattern": "inherit",
                        "highlight": None,
                    }
                },
            }
        )
        overrides = cfg.alt_styles["dim"]
        self.assertIsInstance(overrides.color, Inherit)
        self.assertIs(overrides.pattern, UNSET)
        dim = resolve_style_config(overrides, cfg.style)
        self.assertEqual(dim.color.ref, "shadow")
        self.assertEqual(dim.color.blend, 0.2)
        self.assertIsNone(dim.highlight)

    def test_invalid_alt_style_names_its_tag(self):
        cfg = IndentBarsConfig(alt_styles={"loud": StyleOverrides(color=Inherit({"blend": 3.0}))})
        with self.assertRaises(ConfigError) as ctx:
            validate_config(cfg)
        self.assertIn("loud", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
