"""Tests for the type annotation analyzer."""

from astsentry.engine.types import Category
from astsentry.rules.type_annotations import TypeAnnotationAnalyzer

from helpers import by_rule, run_analyzer


class TestTypeAnnotationAnalyzer:

    def setup_method(self):
        self.analyzer = TypeAnnotationAnalyzer()

    def analyze(self, code, file_path="test.ts"):
        return run_analyzer(self.analyzer, code, "typescript", file_path=file_path)

    def test_missing_return_type(self):
        issues = self.analyze("function add(a: number, b: number) {\n  return a + b;\n}")
        assert [i.rule for i in issues] == ["explicit-function-return-type"]
        assert "'add'" in issues[0].message
        assert (issues[0].line, issues[0].column) == (1, 1)
        assert issues[0].category == Category.TYPE_ANNOTATION

    def test_exported_function(self):
        issues = self.analyze("export function run() {}\nexport function stop(): void {}")
        assert [i.rule for i in issues] == ["explicit-function-return-type"]
        assert "'run'" in issues[0].message

    def test_any_in_parameters_and_return(self):
        issues = self.analyze("function load(input: any): any[] {\n  return [];\n}")
        anys = by_rule(issues, "no-any-type")
        assert len(anys) == 2
        assert all(i.code_snippet == "any" for i in anys)

    def test_any_in_union_variable(self):
        issues = self.analyze('const value: string | any = "x";')
        assert [i.rule for i in issues] == ["no-any-type"]

    def test_nested_functions_not_inspected(self):
        code = "function outer(): void {\n  function inner() {}\n}"
        assert self.analyze(code) == []

    def test_javascript_files_are_skipped(self):
        issues = run_analyzer(self.analyzer, "function add(a, b) { return a + b; }")
        assert issues == []

    def test_tsx_files(self):
        code = "function View(props: any): JSX.Element {\n  return <div />;\n}"
        issues = self.analyze(code, file_path="view.tsx")
        assert [i.rule for i in issues] == ["no-any-type"]
