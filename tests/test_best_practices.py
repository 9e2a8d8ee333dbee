"""Tests for the best-practice analyzer."""

from astsentry.engine.types import Category, Severity
from astsentry.rules.best_practices import BestPracticeAnalyzer

from helpers import by_rule, run_analyzer


class TestBestPracticeAnalyzer:

    def setup_method(self):
        self.analyzer = BestPracticeAnalyzer()

    def analyze(self, code):
        return run_analyzer(self.analyzer, code)

    def test_var_reported_per_declarator(self):
        issues = self.analyze("var first = 1, second = 2;\nlet third = 3;")
        assert len(by_rule(issues, "no-var")) == 2
        assert "first" in issues[0].message
        assert issues[0].category == Category.BEST_PRACTICE

    def test_loose_equality(self):
        issues = self.analyze("if (a == b) {}\nif (a != b) {}\nif (a === b) {}")
        loose = by_rule(issues, "eqeqeq")
        assert len(loose) == 2
        assert "'==='" in loose[0].message
        assert "'!=='" in loose[1].message

    def test_empty_catch(self):
        issues = self.analyze("try { run(); } catch (e) {}")
        assert [i.rule for i in issues] == ["no-empty-catch"]

    def test_catch_with_comment_only_is_empty(self):
        issues = self.analyze("try { run(); } catch (e) {\n  // ignore\n}")
        assert [i.rule for i in issues] == ["no-empty-catch"]

    def test_catch_with_statement(self):
        assert self.analyze("try { run(); } catch (e) { report(e); }") == []

    def test_double_negation(self):
        issues = self.analyze("const flag = !!value;\nconst other = !value;")
        assert [i.rule for i in issues] == ["no-double-negation"]

    def test_void(self):
        assert [i.rule for i in self.analyze("void 0;")] == ["no-void"]

    def test_sequence_reported_once(self):
        issues = self.analyze("a = 1, b = 2, c = 3;")
        assert [i.rule for i in issues] == ["no-sequences"]

    def test_debugger_is_a_warning(self):
        issues = self.analyze("debugger;")
        assert [i.rule for i in issues] == ["no-debugger"]
        assert issues[0].severity == Severity.WARNING

    def test_other_rules_are_suggestions(self):
        issues = self.analyze("var value = a == b;")
        assert {i.severity for i in issues} == {Severity.SUGGESTION}
