import sys
import unittest
from dataclasses import dataclass
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "markup"))

from styledconsole_markup.effects import Effect, EffectRegistry, Identity, TimedReveal


class EffectApplyTests(unittest.TestCase):
    def test_identity_appends_once(self):
        chunks, sleeps = [], []
        Identity().apply("héllo", chunks.append, sleeps.append)
        self.assertEqual(chunks, ["héllo"])
        self.assertEqual(sleeps, [])

    def test_timed_reveal_paces_each_code_point(self):
        chunks, sleeps = [], []
        TimedReveal(delay_ms=100).apply("a😀c", chunks.append, sleeps.append)
        self.assertEqual(chunks, ["a", "😀", "c"])
        self.assertEqual(sleeps, [0.1, 0.1, 0.1])

    def test_direct_default_delay(self):
        self.assertEqual(TimedReveal().delay_ms, 500)

    def test_negative_delay_rejected(self):
        with self.assertRaises(ValueError):
            TimedReveal(delay_ms=-1)


class RegistryTests(unittest.TestCase):
    def setUp(self):
        self.registry = EffectRegistry.with_builtins()

    def test_builtin_names(self):
        self.assertEqual(self.registry.names(), ["Identity", "NoEffect", "TimedReveal", "TypeWriter"])

    def test_unknown_name_is_identity(self):
        self.assertEqual(self.registry.resolve("Sparkle"), Identity())
        self.assertEqual(self.registry.resolve(None), Identity())
        self.assertEqual(self.registry.resolve("Sparkle", "3"), Identity())

    def test_markup_default_delay(self):
        self.assertEqual(self.registry.resolve("TimedReveal"), TimedReveal(delay_ms=200))
        self.assertEqual(self.registry.resolve("TypeWriter"), TimedReveal(delay_ms=200))

    def test_parameter_applied(self):
        self.assertEqual(self.registry.resolve("TimedReveal", "100"), TimedReveal(delay_ms=100))

    def test_parameter_type_mismatch_keeps_default(self):
        self.assertEqual(self.registry.resolve("TimedReveal", "fast"), TimedReveal(delay_ms=200))
        self.assertEqual(self.registry.resolve("TimedReveal", "1.5"), TimedReveal(delay_ms=200))
        self.assertEqual(self.registry.resolve("TimedReveal", "-5"), TimedReveal(delay_ms=200))

    def test_parameterless_effect_ignores_parameter(self):
        self.assertEqual(self.registry.resolve("Identity", "100"), Identity())

    def test_runtime_registration(self):
        @dataclass(frozen=True)
        class Shout(Effect):
            times: int = 1

            def apply(self, text, append, sleep=None):
                append(text.upper() * self.times)

        self.registry.register("Shout", Shout, param_type=int, markup_default=1)
        effect = self.registry.resolve("Shout", "2")
        self.assertEqual(effect, Shout(times=2))
        chunks = []
        effect.apply("hi", chunks.append)
        self.assertEqual(chunks, ["HIHI"])
        self.assertIn("Shout", self.registry.names())

    def test_variant_without_apply_fails_when_built(self):
        @dataclass(frozen=True)
        class Silent(Effect):
            pass

        self.registry.register("Silent", Silent)
        with self.assertRaises(TypeError):
            self.registry.resolve("Silent")
        with self.assertRaises(TypeError):
            Effect()

    def test_registries_are_independent(self):
        self.registry.register("Other", Identity)
        self.assertNotIn("Other", EffectRegistry.with_builtins().names())


if __name__ == "__main__":
    unittest.main()
