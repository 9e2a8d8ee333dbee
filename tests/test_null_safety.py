"""Tests for the null-safety analyzer."""

from astsentry.engine.types import Severity
from astsentry.rules.null_safety import NullSafetyAnalyzer, looks_like_array

from helpers import by_rule, run_analyzer


class TestNullSafetyAnalyzer:

    def setup_method(self):
        self.analyzer = NullSafetyAnalyzer()

    def analyze(self, code, language="javascript"):
        return run_analyzer(self.analyzer, code, language)

    def test_optional_chain_is_safe(self):
        assert self.analyze("a?.b?.c;") == []

    def test_plain_chain_reported_once(self):
        issues = self.analyze("a.b.c;")
        assert [i.rule for i in issues] == ["no-unsafe-member-access"]
        assert issues[0].code_snippet == "a.b.c"
        assert issues[0].severity == Severity.WARNING

    def test_single_access_is_fine(self):
        assert self.analyze("a.b;") == []

    def test_optional_link_anywhere_in_chain(self):
        assert self.analyze("a?.b.c.d;") == []
        assert self.analyze("a.b?.c;") == []

    def test_array_access(self):
        issues = self.analyze("items[0];\nuser[0];")
        assert [i.rule for i in issues] == ["no-unsafe-array-access"]
        assert issues[0].severity == Severity.SUGGESTION

    def test_array_method(self):
        issues = self.analyze("items.map(render);\nitems?.map(render);")
        methods = by_rule(issues, "no-unsafe-array-method")
        assert len(methods) == 1
        assert methods[0].code_snippet == "items.map(render)"
        assert "map()" in methods[0].message

    def test_other_methods_are_ignored(self):
        assert self.analyze("items.push(entry);") == []

    def test_destructuring_without_defaults(self):
        issues = self.analyze("const { first, second = 1 } = config;\nconst { other = 2 } = config;")
        assert [i.rule for i in issues] == ["no-unsafe-destructuring"]
        assert issues[0].line == 1

    def test_array_destructuring(self):
        issues = self.analyze("const [head] = list;\nconst [tail = null] = list;")
        assert [(i.rule, i.line) for i in issues] == [("no-unsafe-destructuring", 1)]

    def test_renamed_property(self):
        issues = self.analyze("const { name: label } = user;")
        assert [i.rule for i in issues] == ["no-unsafe-destructuring"]

    def test_typescript(self):
        assert [i.rule for i in self.analyze("const n: number = a.b.c;", "typescript")] == [
            "no-unsafe-member-access"
        ]

    def test_array_name_heuristic(self):
        assert looks_like_array("users")
        assert looks_like_array("myArray")
        assert not looks_like_array("user")
