"""Tests for the in-memory HTML document model."""

from __future__ import annotations

import pytest

from cloverville.infrastructure.dom import Document, Element, Text, parse_fragment


class TestParsing:
    def test_round_trip_preserves_structure(self) -> None:
        markup = '<!DOCTYPE html><html><body><div id="a" class="x y">hi</div></body></html>'
        assert Document.from_html(markup).to_html() == markup

    def test_void_elements_have_no_children(self) -> None:
        doc = Document.from_html('<p>a<br>b<img src="x.png"></p>')
        p = doc.query_selector("p")
        assert p is not None
        assert [type(c).__name__ for c in p.children] == ["Text", "Element", "Text", "Element"]
        assert doc.to_html() == '<p>a<br>b<img src="x.png"></p>'

    def test_self_closing_tag(self) -> None:
        doc = Document.from_html("<div><span/>after</div>")
        div = doc.query_selector("div")
        assert div is not None
        assert div.inner_text == "after"

    def test_entities_decoded_and_reescaped(self) -> None:
        doc = Document.from_html("<p>Fish &amp; Chips &lt;3</p>")
        p = doc.query_selector("p")
        assert p is not None
        assert p.inner_text == "Fish & Chips <3"
        assert p.inner_html == "Fish &amp; Chips &lt;3"

    def test_script_content_is_verbatim(self) -> None:
        markup = "<script>if (a < b && c) { go(); }</script>"
        assert Document.from_html(markup).to_html() == markup

    def test_comments_round_trip(self) -> None:
        markup = "<div><!-- filled at load --></div>"
        assert Document.from_html(markup).to_html() == markup

    def test_bare_attribute(self) -> None:
        markup = "<input disabled>"
        assert Document.from_html(markup).to_html() == markup

    def test_stray_end_tag_dropped(self) -> None:
        doc = Document.from_html("<div>a</span>b</div>")
        assert doc.to_html() == "<div>ab</div>"

    def test_unclosed_paragraphs_are_siblings(self) -> None:
        doc = Document.from_html("<body><p>Intro<p>More</body>")
        assert doc.to_html() == "<body><p>Intro</p><p>More</p></body>"

    def test_block_start_closes_paragraph(self) -> None:
        doc = Document.from_html("<p>Intro<div>Block</div>")
        assert doc.to_html() == "<p>Intro</p><div>Block</div>"

    def test_inline_start_keeps_paragraph_open(self) -> None:
        markup = "<p>Intro <span>inline</span> tail</p>"
        assert Document.from_html(markup).to_html() == markup

    @pytest.mark.parametrize(
        ("markup", "expected"),
        [
            ("<ul><li>a<li>b</ul>", "<ul><li>a</li><li>b</li></ul>"),
            ("<dl><dt>k<dd>v<dt>k2</dl>", "<dl><dt>k</dt><dd>v</dd><dt>k2</dt></dl>"),
            (
                "<select><option>a<option>b</select>",
                "<select><option>a</option><option>b</option></select>",
            ),
            (
                "<table><tr><td>1<td>2<tr><td>3</table>",
                "<table><tr><td>1</td><td>2</td></tr><tr><td>3</td></tr></table>",
            ),
        ],
    )
    def test_optional_end_tags(self, markup: str, expected: str) -> None:
        assert Document.from_html(markup).to_html() == expected

    def test_nested_list_items_stay_nested(self) -> None:
        markup = "<ul><li>a<ul><li>b</li></ul></li><li>c</li></ul>"
        assert Document.from_html(markup).to_html() == markup

    def test_optional_end_tags_serialize_stably(self) -> None:
        once = Document.from_html("<ul><li><p>a<li>b</ul><p>x<p>y").to_html()
        assert once == "<ul><li><p>a</p></li><li>b</li></ul><p>x</p><p>y</p>"
        assert Document.from_html(once).to_html() == once

    def test_parse_fragment_detaches_nodes(self) -> None:
        nodes = parse_fragment("<b>x</b>tail")
        assert len(nodes) == 2
        assert all(node.parent is None for node in nodes)


class TestLookup:
    def test_get_element_by_id(self, document: Document) -> None:
        el = document.get_element_by_id("progress-text")
        assert el is not None
        assert el.tag == "p"

    def test_get_element_by_id_missing(self, document: Document) -> None:
        assert document.get_element_by_id("nope") is None

    def test_class_selector(self, document: Document) -> None:
        el = document.query_selector(".co2-pie")
        assert el is not None
        assert el.tag == "div"

    def test_compound_selector(self) -> None:
        doc = Document.from_html('<p class="a">1</p><div class="a b" id="z">2</div>')
        assert [e.inner_text for e in doc.query_selector_all("div.a.b#z")] == ["2"]

    def test_selector_group_in_document_order(self, document: Document) -> None:
        nav = document.query_selector(".nav-links")
        assert nav is not None
        links = nav.query_selector_all("a, span")
        assert [link.inner_text for link in links] == ["Home", "Market", "Community"]

    def test_universal_selector(self) -> None:
        doc = Document.from_html("<div><p>x</p></div>")
        assert len(doc.query_selector_all("*")) == 2

    @pytest.mark.parametrize("selector", ["", "nav a", "div > p", "[href]"])
    def test_unsupported_selector_raises(self, document: Document, selector: str) -> None:
        with pytest.raises(ValueError, match="Unsupported selector"):
            document.query_selector_all(selector)


class TestClassList:
    def test_add_remove_contains(self) -> None:
        el = Element("div", {"class": "menu"})
        el.class_list.add("open")
        assert el.get_attribute("class") == "menu open"
        assert el.class_list.contains("open")
        el.class_list.remove("open")
        assert el.get_attribute("class") == "menu"

    def test_add_is_idempotent(self) -> None:
        el = Element("div")
        el.class_list.add("open")
        el.class_list.add("open")
        assert list(el.class_list) == ["open"]

    def test_toggle_reports_state(self) -> None:
        el = Element("div")
        assert el.class_list.toggle("open") is True
        assert el.class_list.toggle("open") is False
        assert "class" not in el.attrs


class TestStyle:
    def test_set_and_read(self) -> None:
        el = Element("div", {"style": "color: red"})
        el.style["width"] = "40%"
        assert el.get_attribute("style") == "color: red; width: 40%"
        assert el.style["width"] == "40%"

    def test_overwrite_keeps_position(self) -> None:
        el = Element("div", {"style": "width: 1%; color: red"})
        el.style["width"] = "2%"
        assert el.get_attribute("style") == "width: 2%; color: red"

    def test_value_with_commas(self) -> None:
        el = Element("div")
        el.style["background"] = "rgba(10, 57, 2, 0.7)"
        assert el.style.get("background") == "rgba(10, 57, 2, 0.7)"

    def test_delete_last_declaration_drops_attribute(self) -> None:
        el = Element("div", {"style": "width: 1%"})
        del el.style["width"]
        assert "style" not in el.attrs


class TestContent:
    def test_inner_html_assignment_parses(self) -> None:
        el = Element("section")
        el.inner_html = '<div class="card"><h3>A</h3></div><div class="card"><h3>B</h3></div>'
        assert len(el.query_selector_all(".card")) == 2
        assert all(child.parent is el for child in el.children)

    def test_inner_html_replaces_previous_children(self) -> None:
        el = Element("section")
        el.inner_html = "<p>old</p>"
        old = el.children[0]
        el.inner_html = "<p>new</p>"
        assert el.inner_text == "new"
        assert old.parent is None

    def test_inner_text_escapes_on_output(self) -> None:
        el = Element("p")
        el.inner_text = "<b>not bold</b>"
        assert isinstance(el.children[0], Text)
        assert el.to_html() == "<p>&lt;b&gt;not bold&lt;/b&gt;</p>"

    def test_attribute_values_escaped(self) -> None:
        el = Element("a", {"title": 'say "hi"'})
        assert el.to_html() == '<a title="say &#34;hi&#34;"></a>'


class TestEvents:
    def test_click_dispatches_to_listeners(self) -> None:
        el = Element("button")
        seen: list[str] = []
        el.add_event_listener("click", lambda event: seen.append(event.type))
        el.click()
        el.click()
        assert seen == ["click", "click"]

    def test_event_target(self) -> None:
        el = Element("button")
        targets: list[Element] = []
        el.add_event_listener("click", lambda event: targets.append(event.target))
        el.click()
        assert targets == [el]

    def test_click_without_listeners(self) -> None:
        Element("button").click()
