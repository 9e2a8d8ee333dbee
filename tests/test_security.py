"""Tests for the security analyzer."""

from astsentry.engine.types import Category, Severity
from astsentry.rules.security import SecurityAnalyzer

from helpers import by_rule, run_analyzer


class TestSecurityAnalyzer:

    def setup_method(self):
        self.analyzer = SecurityAnalyzer()

    def analyze(self, code, language="javascript"):
        return run_analyzer(self.analyzer, code, language)

    def test_eval_reported_on_callee(self):
        issues = self.analyze('eval("1 + 1");')
        assert [i.rule for i in issues] == ["no-eval"]
        assert issues[0].code_snippet == "eval"
        assert issues[0].severity == Severity.WARNING
        assert issues[0].category == Category.SECURITY

    def test_alert(self):
        assert [i.rule for i in self.analyze('alert("hello");')] == ["no-alert"]

    def test_function_constructor(self):
        issues = self.analyze('const make = Function("return 1");\nconst other = new Function("return 2");')
        assert len(by_rule(issues, "no-new-func")) == 2

    def test_timer_with_string(self):
        issues = self.analyze('setTimeout("tick()", 10);\nsetInterval("tick()", 10);')
        assert [i.rule for i in issues] == ["no-setTimeout-string", "no-setInterval-string"]

    def test_timer_with_function_is_fine(self):
        assert self.analyze("setTimeout(() => tick(), 10);") == []

    def test_document_write(self):
        issues = self.analyze('document.write("<p>");')
        assert [i.rule for i in issues] == ["no-document-write"]

    def test_html_sinks(self):
        issues = self.analyze("el.innerHTML = html;\nel.outerHTML = html;")
        assert [i.rule for i in issues] == ["no-inner-html", "no-outer-html"]
        assert issues[1].line == 2

    def test_console(self):
        issues = self.analyze("console.log(x);\nconsole.table(x);")
        assert [i.rule for i in issues] == ["no-console"]
        assert issues[0].code_snippet == "console.log"

    def test_hardcoded_secret(self):
        issues = self.analyze('const apiToken = "abc123";\nconst label = "abc123";')
        secrets = by_rule(issues, "no-hardcoded-secrets")
        assert len(secrets) == 1
        assert "apiToken" in secrets[0].message

    def test_secret_from_environment_is_fine(self):
        assert self.analyze("const password = process.env.PASSWORD;") == []

    def test_aliased_eval_not_tracked(self):
        assert self.analyze("const run = eval;\nrun(code);") == []

    def test_typescript(self):
        issues = self.analyze('const secret: string = "s3cr3t";', language="typescript")
        assert [i.rule for i in issues] == ["no-hardcoded-secrets"]
