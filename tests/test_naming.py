"""Tests for the naming analyzer."""

from astsentry.engine.types import Severity
from astsentry.rules.naming import NamingAnalyzer, is_boolean_without_prefix, is_too_short

from helpers import by_rule, run_analyzer


class TestNamingHelpers:

    def test_short_names(self):
        assert is_too_short("ab")
        assert not is_too_short("i")
        assert not is_too_short("abc")

    def test_boolean_prefix(self):
        assert is_boolean_without_prefix("visible")
        assert not is_boolean_without_prefix("isVisible")
        assert not is_boolean_without_prefix("visibility")


class TestNamingAnalyzer:

    def setup_method(self):
        self.analyzer = NamingAnalyzer()

    def analyze(self, code, language="javascript"):
        return run_analyzer(self.analyzer, code, language)

    def test_generic_variable(self):
        issues = self.analyze("const data = load();")
        assert [i.rule for i in issues] == ["no-generic-name"]
        assert issues[0].code_snippet == "data"
        assert issues[0].severity == Severity.SUGGESTION

    def test_short_variable(self):
        issues = self.analyze("let ab = compute();")
        assert [i.rule for i in issues] == ["no-short-name"]

    def test_boolean_without_prefix(self):
        issues = self.analyze("let visible = true;\nlet isVisible = true;")
        assert [i.rule for i in issues] == ["boolean-prefix"]
        assert "visible" in issues[0].message

    def test_generic_function_uses_function_span(self):
        issues = self.analyze("function handle() {}")
        generic = by_rule(issues, "no-generic-function-name")
        assert len(generic) == 1
        assert (generic[0].line, generic[0].column) == (1, 1)
        assert generic[0].code_snippet == "function handle() {}"

    def test_loop_variables(self):
        issues = self.analyze("for (let i = 0; i < 3; i++) {}\nfor (let q = 0; q < 3; q++) {}")
        assert [i.rule for i in issues] == ["no-short-name"]
        assert "Loop variable 'q'" in issues[0].message

    def test_for_of_variable(self):
        issues = self.analyze("for (const el of list) {}")
        assert [i.rule for i in issues] == ["no-short-name"]

    def test_parameters(self):
        issues = self.analyze("function compute(a, val) { return a + val; }")
        assert [i.rule for i in issues] == ["no-generic-name"]
        assert "Parameter 'val'" in issues[0].message

    def test_arrow_parameter(self):
        issues = self.analyze("const toLabel = (item) => item.name;")
        assert [i.rule for i in issues] == ["no-generic-name"]

    def test_several_rules_for_one_name(self):
        issues = self.analyze("let ok = false;")
        assert [i.rule for i in issues] == ["no-short-name"]
        issues = self.analyze("let open = false;")
        assert [i.rule for i in issues] == ["boolean-prefix"]

    def test_descriptive_names(self):
        code = "const userCount = 2;\nfunction loadUsers(limit) { return limit; }"
        assert self.analyze(code) == []

    def test_typescript_typed_parameter(self):
        issues = self.analyze("function render(temp: string): void {}", language="typescript")
        assert [i.rule for i in issues] == ["no-generic-name"]
