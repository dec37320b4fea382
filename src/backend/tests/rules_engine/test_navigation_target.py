from common.rules_engine.models import Severity
from common.rules_engine.rules.navigation_target import NAVIGATION_TARGET


def test_empty_href_is_flagged(make_document, make_ctx):
    doc = make_document('<a href="#" id="lnk_help">Help</a>')
    findings = NAVIGATION_TARGET().evaluate(make_ctx(document=doc))
    assert len(findings) == 1
    assert findings[0].severity == Severity.WARNING
    assert findings[0].element_ref == "#lnk_help"


def test_empty_onclick_is_flagged(make_document, make_ctx):
    doc = make_document('<div onclick="" id="card">Card</div>')
    assert len(NAVIGATION_TARGET().evaluate(make_ctx(document=doc))) == 1


def test_void_onclick_on_navigation_id_is_flagged(make_document, make_ctx):
    doc = make_document(
        '<div id="cell_language" onclick="void(0)">Language</div>'
        '<div id="toggle_sound" onclick="javascript:void(0)">Sound</div>'
    )
    findings = NAVIGATION_TARGET().evaluate(make_ctx(document=doc))
    assert [f.element_ref for f in findings] == ["#cell_language"]


def test_button_without_onclick_is_flagged(make_document, make_ctx):
    doc = make_document('<button class="rounded">Next</button>')
    assert len(NAVIGATION_TARGET().evaluate(make_ctx(document=doc))) == 1


def test_submit_button_inside_form_passes(make_document, make_ctx):
    doc = make_document('<form><input type="text"><button type="submit">Save</button></form>')
    assert NAVIGATION_TARGET().evaluate(make_ctx(document=doc)) == []


def test_modal_toggle_button_passes(make_document, make_ctx):
    doc = make_document('<button data-bs-toggle="modal" data-bs-target="#m">Open</button>')
    assert NAVIGATION_TARGET().evaluate(make_ctx(document=doc)) == []


def test_wired_elements_pass(make_document, make_ctx):
    doc = make_document(
        "<button onclick=\"location.href='SCR-DASH-001-home.html'\">Home</button>"
        '<a href="SCR-SETTING-001-main.html">Settings</a>'
    )
    assert NAVIGATION_TARGET().evaluate(make_ctx(document=doc)) == []


def test_dead_edge_is_error(make_document, make_ctx, make_graph):
    doc = make_document("<p>home</p>", screen_id="SCR-DASH-001-home")
    graph = make_graph(
        ("SCR-DASH-001-home", "SCR-VOCAB-001-list"),
        ("SCR-DASH-001-home", "SCR-MISSING-001"),
        known_screens=("SCR-DASH-001-home", "SCR-VOCAB-001-list"),
    )
    findings = NAVIGATION_TARGET().evaluate(make_ctx(document=doc, navigation=graph))
    assert len(findings) == 1
    assert findings[0].severity == Severity.ERROR
    assert "SCR-MISSING-001" in findings[0].message


def test_dead_edges_need_known_screens(make_document, make_ctx, make_graph):
    doc = make_document("<p>home</p>", screen_id="SCR-DASH-001-home")
    graph = make_graph(("SCR-DASH-001-home", "SCR-MISSING-001"))
    assert NAVIGATION_TARGET().evaluate(make_ctx(document=doc, navigation=graph)) == []


def test_close_button_without_onclick_is_error(make_document, make_ctx):
    doc = make_document(
        '<button id="btn_close_icon"><svg><path stroke-linecap="round" d="M6 18L18 6M6 6l12 12"/></svg></button>'
        '<button id="btn_close_text">&times;</button>'
        '<button id="btn_dismiss" class="btn-close"></button>'
        '<button id="btn_exit" aria-label="關閉"></button>'
    )
    findings = NAVIGATION_TARGET().evaluate(make_ctx(document=doc))
    assert [f.element_ref for f in findings] == ["#btn_close_icon", "#btn_close_text", "#btn_dismiss", "#btn_exit"]
    assert {f.severity for f in findings} == {Severity.ERROR}
    assert all("close/exit" in f.message for f in findings)


def test_settings_row_without_onclick_is_error(make_document, make_ctx):
    doc = make_document(
        '<button id="row_language" class="flex justify-between">'
        '<span>Language</span><svg><path d="M9 5l7 7-7 7"/></svg></button>'
        '<button id="row_sound" class="flex active:bg-gray-100"><span>Sound</span><span>›</span></button>'
    )
    findings = NAVIGATION_TARGET().evaluate(make_ctx(document=doc))
    assert [f.element_ref for f in findings] == ["#row_language", "#row_sound"]
    assert {f.severity for f in findings} == {Severity.ERROR}
    assert all("settings row" in f.message for f in findings)


def test_dismiss_attribute_wires_close_button(make_document, make_ctx):
    doc = make_document('<button class="btn-close" data-bs-dismiss="modal">×</button>')
    assert NAVIGATION_TARGET().evaluate(make_ctx(document=doc)) == []


def test_plain_unwired_button_stays_a_warning(make_document, make_ctx):
    doc = make_document('<button class="rounded bg-black">Next</button>')
    findings = NAVIGATION_TARGET().evaluate(make_ctx(document=doc))
    assert [f.severity for f in findings] == [Severity.WARNING]
