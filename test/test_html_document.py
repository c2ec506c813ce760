from storeversion.html_document import first_matching, parse_html


def test_find_by_class_in_document_order():
    doc = parse_html(
        '<div class="a b"><p class="b">one</p></div><span class="b">two</span>'
    )
    found = doc.find_by_class("b")
    assert [el.tag for el in found] == ["div", "p", "span"]


def test_find_by_tag_and_text():
    doc = parse_html("<ul><li>first</li><li>second <b>bold</b></li></ul>")
    items = doc.find_by_tag("li")
    assert [li.text for li in items] == ["first", "second bold"]


def test_query_class_returns_first_descendant():
    doc = parse_html('<div id="x"><i class="v">1</i><i class="v">2</i></div>')
    container = doc.find_by_tag("div")[0]
    assert container.query_class("v").text == "1"
    assert container.query_class("missing") is None


def test_void_elements_do_not_swallow_siblings():
    doc = parse_html('<div><br><img src="x"><span class="s">after</span></div>')
    div = doc.find_by_tag("div")[0]
    assert div.query_class("s").text == "after"


def test_unclosed_tags_are_tolerated():
    doc = parse_html('<div class="outer"><p>text<div class="inner">x</div>')
    assert doc.find_by_class("inner")[0].text == "x"


def test_stray_end_tag_is_ignored():
    doc = parse_html('</span><p class="p">ok</p>')
    assert doc.find_by_class("p")[0].text == "ok"


def test_entities_unescaped_in_text_but_not_in_scripts():
    doc = parse_html("<p>What&#39;s New</p><script>var a = '&amp;';</script>")
    assert doc.find_by_tag("p")[0].text == "What's New"
    assert doc.find_by_tag("script")[0].text == "var a = '&amp;';"


def test_first_matching():
    doc = parse_html("<b>1</b><b>2</b><b>3</b>")
    bold = doc.find_by_tag("b")
    assert first_matching(lambda el: el.text == "2", bold) is bold[1]
    assert first_matching(lambda el: el.text == "9", bold) is None


def test_deeply_nested_tree_keeps_document_order():
    doc = parse_html("<div>" + "<p>x" * 3000 + "</div><span>end</span>")
    assert len(doc.find_by_tag("p")) == 3000
    assert doc.find_by_tag("div")[0].text == "x" * 3000
    assert [el.tag for el in doc.iter_descendants()][-1] == "span"
