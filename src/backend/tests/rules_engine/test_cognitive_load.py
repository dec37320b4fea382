from common.rules_engine.models import Severity
from common.rules_engine.rules.cognitive_load import COGNITIVE_LOAD


def _fields(n: int) -> str:
    return "".join(f'<input type="text" name="f{i}">' for i in range(n))


def test_cognitive_load_nine_form_fields_warns_once(make_document, make_ctx):
    doc = make_document(f'<form>{_fields(9)}<button type="submit">Save</button></form>')
    findings = COGNITIVE_LOAD().evaluate(make_ctx(document=doc))
    assert len(findings) == 1
    assert findings[0].severity == Severity.WARNING
    assert findings[0].rule_id == "cognitive-load"
    assert "9 > 7" in findings[0].message


def test_cognitive_load_within_limits_passes(make_document, make_ctx):
    doc = make_document(f'<form>{_fields(7)}<button type="submit">Save</button></form>')
    assert COGNITIVE_LOAD().evaluate(make_ctx(document=doc)) == []


def test_cognitive_load_hidden_inputs_are_not_form_fields(make_document, make_ctx):
    hidden = "".join(f'<input type="hidden" name="h{i}">' for i in range(10))
    doc = make_document(f"<form>{hidden}{_fields(2)}</form>")
    assert COGNITIVE_LOAD().evaluate(make_ctx(document=doc)) == []


def test_cognitive_load_too_many_primary_buttons(make_document, make_ctx):
    buttons = "".join(f'<button class="btn-primary" onclick="go()">Go {i}</button>' for i in range(4))
    doc = make_document(buttons)
    findings = COGNITIVE_LOAD().evaluate(make_ctx(document=doc))
    assert [f.message for f in findings] == ["Too many primary actions: 4 > 3"]


def test_cognitive_load_too_many_interactive_elements(make_document, make_ctx):
    links = "".join(f'<a href="SCR-ITEM-{i:03d}.html">Item {i}</a>' for i in range(16))
    doc = make_document(links)
    findings = COGNITIVE_LOAD().evaluate(make_ctx(document=doc))
    assert len(findings) == 1
    assert "16 > 15" in findings[0].message


def test_cognitive_load_threshold_override(make_document, make_ctx):
    doc = make_document(f"<form>{_fields(5)}</form>")
    cfg = {"cognitive-load": {"max_form_fields": 4}}
    findings = COGNITIVE_LOAD().evaluate(make_ctx(document=doc, client_rules=cfg))
    assert len(findings) == 1
    assert "5 > 4" in findings[0].message


def test_cognitive_load_disabled_returns_nothing(make_document, make_ctx):
    doc = make_document(f"<form>{_fields(20)}</form>")
    cfg = {"cognitive-load": {"enabled": False}}
    assert COGNITIVE_LOAD().evaluate(make_ctx(document=doc, client_rules=cfg)) == []
