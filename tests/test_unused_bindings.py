"""Tests for the unused binding analyzer."""

from astsentry.engine.types import Category, Severity
from astsentry.rules.unused_bindings import UnusedBindingAnalyzer

from helpers import run_analyzer


class TestUnusedBindingAnalyzer:

    def setup_method(self):
        self.analyzer = UnusedBindingAnalyzer()

    def unused_names(self, code, language="javascript"):
        issues = run_analyzer(self.analyzer, code, language)
        return [i.message.split("'")[1] for i in issues]

    def test_unused_variable(self):
        issues = run_analyzer(self.analyzer, "let leftover = 10;")
        assert len(issues) == 1
        issue = issues[0]
        assert issue.rule == "no-unused-vars"
        assert issue.severity == Severity.SUGGESTION
        assert issue.category == Category.CODE_QUALITY
        assert (issue.line, issue.column) == (1, 5)
        assert issue.code_snippet == "leftover"

    def test_underscore_prefix_is_exempt(self):
        assert self.unused_names("let _leftover = 10;") == []

    def test_reported_position(self):
        code = "const first = 1;\nconsole.log(first);\n    let leftover = 10;\n"
        issues = run_analyzer(self.analyzer, code)
        assert [(i.line, i.column) for i in issues] == [(3, 9)]

    def test_redeclaration_reports_the_last_span(self):
        issues = run_analyzer(self.analyzer, "var dup = 1;\nvar dup = 2;")
        assert [(i.rule, i.line, i.column) for i in issues] == [("no-unused-vars", 2, 5)]

    def test_long_else_if_chain(self):
        branches = " else ".join(f"if (mode === {n}) {{ run(); }}" for n in range(3000))
        code = "var mode = 1;\n" + branches + "\nvar late = 2;"
        assert self.unused_names(code) == ["late"]

    def test_use_in_nested_function(self):
        code = "const limit = 3;\nfunction check(n) { return n > limit; }\ncheck(1);"
        assert self.unused_names(code) == []

    def test_unused_function(self):
        assert self.unused_names("function helper() {}") == ["helper"]

    def test_use_in_initializer(self):
        assert self.unused_names("const base = 2;\nconst doubled = base * 2;") == ["doubled"]

    def test_shorthand_property_counts_as_use(self):
        assert self.unused_names("const size = 1;\nexport default { size };") == []

    def test_property_name_is_not_a_use(self):
        assert self.unused_names("const count = 1;\nobj.count = 2;") == ["count"]

    def test_parameter_with_same_name_is_not_a_use(self):
        assert self.unused_names("const token = 1;\nfunction read(token) {}\nread();") == ["token"]

    def test_block_declarations_are_not_collected(self):
        assert self.unused_names("{\n  let hidden = 1;\n}\nif (ok) {\n  let inner = 2;\n}") == []

    def test_if_without_block_is_followed(self):
        assert self.unused_names("if (ok) var flagged = 1;") == ["flagged"]

    def test_for_initializer(self):
        assert self.unused_names("for (let index = 0; ; ) {}") == ["index"]

    def test_declaration_order(self):
        assert self.unused_names("let beta = 1;\nlet alpha = 2;") == ["beta", "alpha"]

    def test_destructuring_is_not_collected(self):
        assert self.unused_names("const { a, b } = source;") == []

    def test_typescript(self):
        code = "const total: number = 1;\nlet spare: string = 'x';\nconsole.log(total);"
        assert self.unused_names(code, language="typescript") == ["spare"]
