"""Tests for the complexity analyzer."""

from astsentry.engine.types import Category, Severity
from astsentry.rules.complexity import ComplexityAnalyzer, function_complexity

from helpers import by_rule, create_test_context, run_analyzer


def chained_ifs(count: int) -> str:
    lines = ["  if (mode === 0) {", "    result = 0;"]
    for index in range(1, count):
        lines.append(f"  }} else if (mode === {index}) {{")
        lines.append(f"    result = {index};")
    lines.append("  }")
    return "\n".join(lines)


class TestFunctionComplexity:

    def first_function(self, code):
        ctx = create_test_context(code)
        return ctx.root.named_children[0]

    def test_straight_line_function(self):
        assert function_complexity(self.first_function("function flat() { return 1; }")) == 1

    def test_if_else_chain(self):
        code = "function pick(mode) {\n" + chained_ifs(10) + "\n}"
        assert function_complexity(self.first_function(code)) == 11

    def test_loops_and_switch(self):
        code = """function walk(items) {
  for (const item of items) { if (item) { count(); } }
  while (pending()) {}
  switch (kind) {
    case 1: break;
    case 2: break;
    default: break;
  }
}"""
        # for + while + 3 cases; the if inside the loop body is not unwrapped
        assert function_complexity(self.first_function(code)) == 6

    def test_try_catch(self):
        code = """function guarded() {
  try {
    if (ready) { start(); }
  } catch (error) {
    if (error) { report(); }
  }
}"""
        assert function_complexity(self.first_function(code)) == 4

    def test_nested_ifs_in_branches(self):
        code = "function nested(a, b) {\n  if (a) {\n    if (b) { go(); } else { stop(); }\n  }\n}"
        assert function_complexity(self.first_function(code)) == 3

    def test_deeply_nested_ifs(self):
        code = "function deep(a) {\n" + "if (a) {" * 1000 + "}" * 1000 + "\n}"
        assert function_complexity(self.first_function(code)) == 1001


class TestComplexityAnalyzer:

    def setup_method(self):
        self.analyzer = ComplexityAnalyzer()

    def analyze(self, code, config=None, language="javascript"):
        return run_analyzer(self.analyzer, code, language, config)

    def test_high_complexity(self):
        code = "function pick(mode) {\n  let result = -1;\n" + chained_ifs(10) + "\n  return result;\n}"
        issues = self.analyze(code)
        assert [i.rule for i in issues] == ["complexity"]
        assert "'pick'" in issues[0].message
        assert "(11)" in issues[0].message
        assert issues[0].severity == Severity.WARNING
        assert issues[0].category == Category.MAINTAINABILITY

    def test_deep_nesting_is_walked_without_recursion(self):
        code = "function deep(a) {\n" + "if (a) {" * 1000 + "}" * 1000 + "\n}"
        issues = self.analyze(code)
        assert issues[0].rule == "complexity"
        depth = by_rule(issues, "max-depth")
        # levels 4 through 1000
        assert len(depth) == 997
        assert "(level 4)" in depth[0].message
        assert "(level 1000)" in depth[-1].message

    def test_complexity_threshold_from_config(self):
        code = "function check(v) {\n  if (v) { return 1; }\n  while (v) {}\n}"
        assert self.analyze(code) == []
        assert [i.rule for i in self.analyze(code, {"max_complexity": 2})] == ["complexity"]

    def test_max_depth_reported_at_fourth_level(self):
        code = "if (a) {\n  if (b) {\n    if (c) {\n      if (d) {\n        go();\n      }\n    }\n  }\n}"
        issues = self.analyze(code)
        assert [i.rule for i in issues] == ["max-depth"]
        assert "level 4" in issues[0].message
        assert (issues[0].line, issues[0].column) == (4, 7)

    def test_else_if_chain_stays_on_one_level(self):
        code = "if (a) {} else if (b) {} else if (c) {} else if (d) {} else if (e) {}"
        assert self.analyze(code) == []

    def test_else_block_is_one_level_deeper(self):
        code = "if (a) {} else {\n  if (b) {\n    if (c) {\n      if (d) {}\n    }\n  }\n}"
        assert [i.rule for i in self.analyze(code)] == ["max-depth"]

    def test_nested_loops(self):
        code = "for (;;) {\n  while (a) {\n    do {\n      for (const x of xs) {}\n    } while (b);\n  }\n}"
        issues = self.analyze(code)
        assert [i.rule for i in issues] == ["max-depth"]
        assert "Loop" in issues[0].message

    def test_function_resets_depth(self):
        code = "if (a) {\n  if (b) {\n    if (c) {\n      const run = () => {\n        if (d) {}\n      };\n    }\n  }\n}"
        assert self.analyze(code) == []

    def test_switch_and_try_do_not_add_levels(self):
        code = ("if (a) {\n  switch (k) {\n    case 1:\n      try {\n        if (b) {\n"
                "          if (c) {}\n        }\n      } catch (e) {}\n  }\n}")
        assert self.analyze(code) == []

    def test_max_statements(self):
        body = "\n".join(f"  step{index}();" for index in range(4))
        code = "function work() {\n" + body + "\n}"
        assert self.analyze(code) == []
        issues = self.analyze(code, {"max_statements": 3})
        assert [i.rule for i in issues] == ["max-statements"]
        assert "(4)" in issues[0].message
        assert issues[0].severity == Severity.SUGGESTION

    def test_case_body_statements(self):
        code = "switch (k) {\n  case 1:\n    one();\n    two();\n    three();\n    break;\n}"
        assert [i.rule for i in self.analyze(code, {"max_statements": 3})] == ["max-statements"]

    def test_max_params_uses_declarator_name(self):
        code = "const compute = (a, b, c, d, e, f) => { return a; };"
        issues = self.analyze(code)
        assert [i.rule for i in issues] == ["max-params"]
        assert "'compute'" in issues[0].message
        assert "(6)" in issues[0].message
        assert issues[0].severity == Severity.SUGGESTION

    def test_methods_and_anonymous_functions(self):
        code = ("class Service {\n  load(a, b, c, d, e, f) {}\n}\n"
                "register(function (a, b, c, d, e, f) {});")
        issues = by_rule(self.analyze(code), "max-params")
        assert len(issues) == 2
        assert "'load'" in issues[0].message
        assert "'<anonymous>'" in issues[1].message

    def test_typescript(self):
        code = "function total(a: number, b: number, c: number, d: number, e: number, f: number): number {\n  return a;\n}"
        assert [i.rule for i in self.analyze(code, language="typescript")] == ["max-params"]
