from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path

from shiftinclude.parsing.links import find_links
from shiftinclude.parsing.shift import InvalidShiftToken
from shiftinclude.rendering.renderer import IncludeError, LinkRenderer

LOG = logging.getLogger("shiftinclude.test.render")

SNIPPET = (
    "fn main() {\n"
    "    // ANCHOR: body\n"
    "    let x = 1;\n"
    "    if x > 0 {\n"
    "        println!(\"{}\", x);\n"
    "    }\n"
    "    // ANCHOR_END: body\n"
    "}\n"
)


class RendererBaseTest(unittest.TestCase):
    """Creates a temporary book source tree per test."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        (self.root / "code").mkdir()
        (self.root / "code" / "main.rs").write_text(SNIPPET, encoding="utf-8")
        self.renderer = LinkRenderer(logger=LOG)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _replace(self, content: str) -> str:
        return self.renderer.replace_all(content, self.root, Path("chapter.md"))


# --------------------------------------------------------------------------- #
#  1. Single directives                                                       #
# --------------------------------------------------------------------------- #
class RenderTests(RendererBaseTest):
    def _render(self, directive: str) -> str:
        (link,) = find_links(directive)
        return self.renderer.render(link, self.root)

    def test_auto_anchor(self) -> None:
        self.assertEqual(
            self._render("{{#shiftinclude auto:code/main.rs:body}}"),
            "let x = 1;\nif x > 0 {\n    println!(\"{}\", x);\n}",
        )

    def test_right_shift_range(self) -> None:
        self.assertEqual(self._render("{{#shiftinclude 2:code/main.rs:1:1}}"), "  fn main() {")

    def test_left_shift_range(self) -> None:
        self.assertEqual(
            self._render("{{#shiftinclude -4:code/main.rs:3:4}}"),
            "let x = 1;\nif x > 0 {",
        )

    def test_plain_include_is_unshifted(self) -> None:
        self.assertEqual(self._render("{{#include code/main.rs:3}}"), "    let x = 1;")

    def test_escaped(self) -> None:
        self.assertEqual(
            self._render("\\{{#shiftinclude auto:code/main.rs}}"),
            "{{#shiftinclude auto:code/main.rs}}",
        )

    def test_bad_token_raises_before_io(self) -> None:
        with self.assertRaises(InvalidShiftToken):
            self._render("{{#shiftinclude left:does/not/exist.rs}}")

    def test_missing_file_raises_with_cause(self) -> None:
        with self.assertRaises(IncludeError) as cm:
            self._render("{{#shiftinclude 2:nope.rs}}")
        self.assertIsInstance(cm.exception.__cause__, OSError)
        self.assertIn("nope.rs", str(cm.exception))


# --------------------------------------------------------------------------- #
#  2. Substitution                                                            #
# --------------------------------------------------------------------------- #
class ReplaceAllTests(RendererBaseTest):
    def test_replaces_in_place(self) -> None:
        out = self._replace("```rust\n{{#shiftinclude auto:code/main.rs:3}}\n```\n")
        self.assertEqual(out, "```rust\nlet x = 1;\n```\n")

    def test_escaped_directive_is_unescaped(self) -> None:
        self.assertEqual(
            self._replace("```hbs\n\\{{#include file.rs}} << an escaped link!\n```"),
            "```hbs\n{{#include file.rs}} << an escaped link!\n```",
        )

    def test_bad_directive_is_isolated_and_located(self) -> None:
        content = "intro\n\n{{#shiftinclude abc:code/main.rs:3}}\n{{#shiftinclude 1:code/main.rs:3}}\n"
        with self.assertLogs(LOG, level="ERROR") as cm:
            out = self._replace(content)
        self.assertEqual(out, "intro\n\n{{#shiftinclude abc:code/main.rs:3}}\n     let x = 1;\n")
        self.assertTrue(any("chapter.md:line 3" in ln and "'abc'" in ln for ln in cm.output))

    def test_missing_file_logs_cause(self) -> None:
        with self.assertLogs(LOG, level="WARNING") as cm:
            out = self._replace("a {{#include missing.md}} b")
        self.assertEqual(out, "a {{#include missing.md}} b")
        self.assertTrue(any(ln.startswith("ERROR") for ln in cm.output))
        self.assertTrue(any("Caused by:" in ln for ln in cm.output))

    def test_unusable_path_is_isolated(self) -> None:
        content = "a {{#include x\x00y}} b {{#shiftinclude 2:code/main.rs:3}}"
        with self.assertLogs(LOG, level="ERROR") as cm:
            out = self._replace(content)
        self.assertEqual(out, "a {{#include x\x00y}} b       let x = 1;")
        self.assertTrue(any("chapter.md:line 1" in ln for ln in cm.output))

    def test_nested_include_resolves_relative_to_included_file(self) -> None:
        (self.root / "code" / "wrapper.md").write_text(
            "before\n{{#shiftinclude auto:main.rs:body}}\nafter\n", encoding="utf-8"
        )
        out = self._replace("{{#shiftinclude 2:code/wrapper.md}}")
        self.assertEqual(
            out,
            "  before\n  let x = 1;\nif x > 0 {\n    println!(\"{}\", x);\n}\n  after",
        )

    def test_cyclic_include_stops_at_max_depth(self) -> None:
        (self.root / "loop.md").write_text("x{{#include loop.md}}", encoding="utf-8")
        renderer = LinkRenderer(max_depth=3, logger=LOG)
        with self.assertLogs(LOG, level="ERROR") as cm:
            out = renderer.replace_all("{{#include loop.md}}", self.root, Path("chapter.md"))
        self.assertEqual(out, "xxx")
        self.assertTrue(any("Stack depth exceeded in chapter.md" in ln for ln in cm.output))


if __name__ == "__main__":
    unittest.main()
