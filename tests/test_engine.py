# -*- coding: utf-8 -*-
"""
Recursive expansion: pattern resolution, content kinds, depth ceiling and
the shared usage set.
"""
from __future__ import annotations

import base64
import os
import tempfile
import unittest
from pathlib import Path
from typing import Optional

from tools.build_fixtures import TINY_PNG, write, write_bytes

from docinject.constants import MAX_DEPTH
from docinject.core.errors import MinifyError
from docinject.core.models import ContentKind, RecursionContext
from docinject.core.report import BuildReport
from docinject.rendering.minifiers import MinifierRegistry
from docinject.runtime.wiring import build_engine


class _FailingMinifier:
    def minify(self, text: str) -> str:
        raise MinifyError("script", "boom")


class EngineTestCase(unittest.TestCase):
    """Fresh temporary base directory and engine per test."""

    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.base = Path(self._td.name).resolve()
        self.report = BuildReport()

    def tearDown(self) -> None:
        self._td.cleanup()

    def expand(
        self,
        text: str,
        *,
        minify: bool = False,
        minifiers: Optional[MinifierRegistry] = None,
        ctx: Optional[RecursionContext] = None,
    ) -> str:
        self.ctx = ctx or RecursionContext(depth=0, minify=minify)
        engine = build_engine(base_dir=self.base, report=self.report, minifiers=minifiers)
        return engine.expand(text, self.ctx)

    def file(self, rel: str, body: str) -> Path:
        return write(self.base / rel, body)


class PatternExpansionTests(EngineTestCase):
    def test_matches_joined_in_sorted_order(self) -> None:
        self.file("parts/b.txt", "B")
        self.file("parts/a.txt", "A")
        out = self.expand('<!-- inject "parts/*.txt" here -->')
        self.assertEqual(out, "A\nB")

    def test_no_match_yields_empty_and_one_diagnostic(self) -> None:
        with self.assertLogs("docinject", level="WARNING") as cm:
            out = self.expand('[<!-- inject "missing/*.md" here -->]')
        self.assertEqual(out, "[]")
        naming = [m for m in cm.output if "missing/*.md" in m]
        self.assertEqual(len(naming), 1)
        self.assertEqual(self.report.patterns_unmatched, 1)

    def test_directories_are_skipped(self) -> None:
        (self.base / "part").mkdir()
        self.file("part.txt", "file")
        with self.assertLogs("docinject", level="WARNING") as cm:
            out = self.expand('<!-- inject "part*" here -->')
        self.assertEqual(out, "file")
        self.assertTrue(any("is not a file" in m for m in cm.output))

    def test_symlinked_files_are_skipped(self) -> None:
        target = self.file("a.txt", "A")
        try:
            os.symlink(target, self.base / "link.txt")
        except (OSError, NotImplementedError):
            self.skipTest("symlinks not supported")
        with self.assertLogs("docinject", level="WARNING") as cm:
            out = self.expand('<!-- inject "*.txt" here -->')
        self.assertEqual(out, "A")
        self.assertTrue(any("link.txt is not a file" in m for m in cm.output))
        self.assertEqual(self.ctx.used, {target.resolve()})

    def test_pattern_is_normalized(self) -> None:
        self.file("a.txt", "A")
        self.assertEqual(self.expand('<!-- inject "./x/../a.txt" here -->'), "A")

    def test_recursive_glob(self) -> None:
        self.file("deep/one/x.txt", "1")
        self.file("deep/two/y.txt", "2")
        self.assertEqual(self.expand('<!-- inject "deep/**/*.txt" here -->'), "1\n2")

    def test_all_three_dialects_in_one_text(self) -> None:
        self.file("a.txt", "a")
        self.file("b.txt", "b")
        self.file("c.txt", "c")
        text = 'A<!-- inject "a.txt" here -->B/* inject "b.txt" here */C[//]: # (inject "c.txt" here)D'
        self.assertEqual(self.expand(text), "AaBbCcD")

    def test_nested_injection(self) -> None:
        self.file("outer.html", "<div><!-- inject \"inner.txt\" here --></div>")
        self.file("inner.txt", "inner")
        self.assertEqual(self.expand('<!-- inject "outer.html" here -->'), "<div>inner</div>")


class UsageSetTests(EngineTestCase):
    def test_repeated_file_recorded_once_rendered_twice(self) -> None:
        a = self.file("a.txt", "A")
        out = self.expand('<!-- inject "a.txt" here -->|<!-- inject "a.txt" here -->')
        self.assertEqual(out, "A|A")
        self.assertEqual(self.ctx.used, {a.resolve()})
        self.assertEqual(self.report.files_rendered, 2)

    def test_nested_files_share_the_set(self) -> None:
        outer = self.file("outer.txt", '<!-- inject "inner.txt" here -->')
        inner = self.file("inner.txt", "x")
        self.expand('<!-- inject "outer.txt" here -->')
        self.assertEqual(self.ctx.used, {outer.resolve(), inner.resolve()})

    def test_unreadable_file_is_used_but_contributes_nothing(self) -> None:
        bad = write_bytes(self.base / "bad.txt", b"\xff\xfe\xfa")
        with self.assertLogs("docinject", level="ERROR"):
            out = self.expand('<!-- inject "bad.txt" here -->')
        self.assertEqual(out, "")
        self.assertIn(bad.resolve(), self.ctx.used)


class DepthCeilingTests(EngineTestCase):
    DIRECTIVE = '<!-- inject "loop.txt" here -->'

    def test_self_injection_terminates(self) -> None:
        self.file("loop.txt", "x" + self.DIRECTIVE)
        with self.assertLogs("docinject", level="WARNING") as cm:
            out = self.expand(self.DIRECTIVE)
        self.assertEqual(out, "x" * (MAX_DEPTH + 1) + self.DIRECTIVE)
        self.assertTrue(any("Maximum recursion depth" in m for m in cm.output))
        self.assertEqual(self.report.depth_truncations, 1)

    def test_mutual_injection_terminates(self) -> None:
        self.file("a.txt", 'a<!-- inject "b.txt" here -->')
        self.file("b.txt", 'b<!-- inject "a.txt" here -->')
        with self.assertLogs("docinject", level="WARNING"):
            out = self.expand('<!-- inject "a.txt" here -->')
        self.assertEqual(out, "ab" * 5 + 'a<!-- inject "b.txt" here -->')

    def test_over_ceiling_returns_input(self) -> None:
        self.file("a.txt", "A")
        text = '<!-- inject "a.txt" here -->'
        with self.assertLogs("docinject", level="WARNING"):
            out = self.expand(text, ctx=RecursionContext(depth=MAX_DEPTH + 1))
        self.assertEqual(out, text)

    def test_at_ceiling_still_expands(self) -> None:
        self.file("a.txt", "A")
        out = self.expand('<!-- inject "a.txt" here -->', ctx=RecursionContext(depth=MAX_DEPTH))
        self.assertEqual(out, "A")

    def test_descend_shares_usage_set(self) -> None:
        ctx = RecursionContext(depth=3, minify=True)
        child = ctx.descend()
        self.assertEqual(child.depth, 4)
        self.assertTrue(child.minify)
        self.assertIs(child.used, ctx.used)


class ImageTests(EngineTestCase):
    def test_png_data_uri(self) -> None:
        write_bytes(self.base / "img/dot.png", TINY_PNG)
        out = self.expand('<!-- inject "img/dot.png" here -->')
        expected = base64.b64encode(TINY_PNG).decode("ascii")
        self.assertEqual(out, f'<img src="data:image/png;base64,{expected}" alt="dot.png">')

    def test_uppercase_extension_and_minify_ignored(self) -> None:
        write_bytes(self.base / "PHOTO.JPG", b"0123456789")
        out = self.expand('<!-- inject "PHOTO.JPG" here -->', minify=True)
        self.assertTrue(out.startswith('<img src="data:image/jpeg;base64,MDEyMzQ1Njc4OQ=="'))
        self.assertTrue(out.endswith('alt="PHOTO.JPG">'))

    def test_image_bytes_are_not_scanned(self) -> None:
        write_bytes(self.base / "odd.gif", b'<!-- inject "x" here -->')
        out = self.expand('<!-- inject "odd.gif" here -->')
        self.assertIn("data:image/gif;base64,", out)


class VectorTests(EngineTestCase):
    SVG = '<svg xmlns="http://www.w3.org/2000/svg">\n  <!-- inject "circle.txt" here -->\n</svg>'

    def setUp(self) -> None:
        super().setUp()
        self.file("icon.svg", self.SVG)
        self.file("circle.txt", '<circle r="1"/>')

    def test_expanded_without_minify(self) -> None:
        out = self.expand('<!-- inject "icon.svg" here -->')
        self.assertEqual(out, '<svg xmlns="http://www.w3.org/2000/svg">\n  <circle r="1"/>\n</svg>')

    def test_minified(self) -> None:
        out = self.expand('<!-- inject "icon.svg" here -->', minify=True)
        self.assertEqual(out, '<svg xmlns="http://www.w3.org/2000/svg"><circle r="1"/></svg>')

    def test_broken_svg_falls_back(self) -> None:
        self.file("broken.svg", "<svg><g></svg>")
        with self.assertLogs("docinject", level="ERROR") as cm:
            out = self.expand('<!-- inject "broken.svg" here -->', minify=True)
        self.assertEqual(out, "<svg><g></svg>")
        self.assertTrue(any("Error minifying" in m for m in cm.output))

    def test_doctype_svg_stays_xml(self) -> None:
        self.file(
            "logo.svg",
            '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" "http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">\n'
            '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 2 2">\n  <!-- inject "circle.txt" here -->\n</svg>\n',
        )
        out = self.expand('<!-- inject "logo.svg" here -->', minify=True)
        self.assertTrue(out.startswith("<!DOCTYPE svg"))
        self.assertTrue(out.endswith('<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 2 2"><circle r="1"/></svg>'))
        self.assertNotIn("<html", out)
        self.assertNotIn("<body", out)


class MarkdownTests(EngineTestCase):
    def test_expanded_before_rendering(self) -> None:
        self.file("note.md", '# Title\n\n<!-- inject "frag.txt" here -->\n')
        self.file("frag.txt", "*emph*")
        out = self.expand('<!-- inject "note.md" here -->')
        self.assertIn("<h1>Title</h1>", out)
        self.assertIn("<em>emph</em>", out)

    def test_markdown_dialect_inside_markdown(self) -> None:
        self.file("note.md", 'Intro\n\n[//]: # (inject "frag.txt" here)\n')
        self.file("frag.txt", "**strong**")
        out = self.expand('<!-- inject "note.md" here -->')
        self.assertIn("<strong>strong</strong>", out)

    def test_raw_markup_passes_through(self) -> None:
        self.file("note.md", 'Text with <span class="x">raw</span> markup.\n')
        out = self.expand('<!-- inject "note.md" here -->')
        self.assertIn('<span class="x">raw</span>', out)

    def test_minified_markdown(self) -> None:
        self.file("note.md", "# A\n\nline one\nline two\n")
        out = self.expand('<!-- inject "note.md" here -->', minify=True)
        self.assertEqual(out, "<h1>A</h1><p>line one line two</p>")


class TextMinifyTests(EngineTestCase):
    CSS = "body {\n  color: red;\n}\n/* note */\n"

    def test_css_minified_only_with_flag(self) -> None:
        self.file("style.css", self.CSS)
        plain = self.expand('<!-- inject "style.css" here -->')
        small = self.expand('<!-- inject "style.css" here -->', minify=True)
        self.assertEqual(plain, self.CSS)
        self.assertNotIn("/* note */", small)
        self.assertNotIn("\n", small)
        self.assertIn("color:red", small)
        self.assertLess(len(small), len(plain))

    def test_js_minified(self) -> None:
        self.file("app.js", "function add(a, b) {\n  // sum\n  return a + b;\n}\n")
        out = self.expand('<!-- inject "app.js" here -->', minify=True)
        self.assertIn("return a+b", out)
        self.assertNotIn("// sum", out)

    def test_html_minified(self) -> None:
        self.file("part.html", "<ul>\n  <li>one</li>\n  <!-- gone -->\n  <li>two</li>\n</ul>\n")
        out = self.expand('<!-- inject "part.html" here -->', minify=True)
        self.assertEqual(out, "<ul><li>one</li><li>two</li></ul>")

    def test_html_sections_keep_their_tags(self) -> None:
        self.file("head.html", '<head>\n <meta charset="utf-8">\n <title>Site</title>\n</head>\n')
        self.file("body.html", '<body class="dark" onload="init()">\n  <main>x</main>\n</body>\n')
        out = self.expand('<!-- inject "head.html" here -->\n<!-- inject "body.html" here -->', minify=True)
        self.assertEqual(
            out,
            '<head><meta charset="utf-8"><title>Site</title></head>\n'
            '<body class="dark" onload="init()"><main>x</main></body>',
        )

    def test_other_suffix_untouched(self) -> None:
        self.file("notes.txt", "keep   spacing\n\n")
        out = self.expand('<!-- inject "notes.txt" here -->', minify=True)
        self.assertEqual(out, "keep   spacing\n\n")

    def test_minifier_failure_falls_back(self) -> None:
        body = "var  x = 1;\n"
        self.file("app.js", body)
        registry = MinifierRegistry(script=_FailingMinifier())
        with self.assertLogs("docinject", level="ERROR") as cm:
            out = self.expand('<!-- inject "app.js" here -->', minify=True, minifiers=registry)
        self.assertEqual(out, body)
        self.assertTrue(any("Error minifying" in m for m in cm.output))
        self.assertEqual(self.report.minify_failures, 1)


class ClassificationTests(unittest.TestCase):
    def test_kinds(self) -> None:
        cases = {
            "a.png": ContentKind.IMAGE,
            "b.JPEG": ContentKind.IMAGE,
            "c.webp": ContentKind.IMAGE,
            "d.svg": ContentKind.VECTOR,
            "e.MD": ContentKind.MARKDOWN,
            "f.js": ContentKind.TEXT,
            "g.html": ContentKind.TEXT,
            "noext": ContentKind.TEXT,
        }
        for name, kind in cases.items():
            with self.subTest(name=name):
                self.assertIs(ContentKind.from_path(Path(name)), kind)


if __name__ == "__main__":
    unittest.main()
