"""Tests for the Markdown renderer."""

from devdiary.render.markdown import (
    ListState,
    MarkdownRenderer,
    markdown_to_plain,
    process_inline,
    render_line,
    render_markdown,
)


def test_empty_input():
    """None and empty strings render to nothing."""
    assert render_markdown(None) == ""
    assert render_markdown("") == ""
    assert render_markdown("  \n\n ") == ""


def test_numbered_list_becomes_bullets():
    """Numbered items are normalized into one unordered list."""
    assert render_markdown("1. a\n2. b\n3. c") == "<ul><li>a</li><li>b</li><li>c</li></ul>"


def test_mixed_markers_share_one_list():
    """Numbered and bullet items join the same <ul>."""
    assert render_markdown("- a\n2) b\n* c") == "<ul><li>a</li><li>b</li><li>c</li></ul>"


def test_list_closed_by_blank_line():
    """A blank line ends the list; the next item opens a new one."""
    assert render_markdown("- a\n\n- b") == "<ul><li>a</li></ul><ul><li>b</li></ul>"


def test_list_closed_by_paragraph_and_heading():
    """Paragraphs and headings close an open list first."""
    assert render_markdown("- a\ntext") == "<ul><li>a</li></ul><p>text</p>"
    assert render_markdown("- a\n## H") == "<ul><li>a</li></ul><h2>H</h2>"


def test_list_flushed_at_end():
    """An open list is closed at end of input."""
    html = render_markdown("intro\n- a")
    assert html == "<p>intro</p><ul><li>a</li></ul>"
    assert html.count("<ul>") == html.count("</ul>")


def test_headings():
    """Heading level follows the number of hashes, up to six."""
    assert render_markdown("# One") == "<h1>One</h1>"
    assert render_markdown("###### Six") == "<h6>Six</h6>"
    assert render_markdown("####### Seven") == "<p>####### Seven</p>"
    assert render_markdown("#NoSpace") == "<p>#NoSpace</p>"


def test_lines_are_stripped():
    """Leading and trailing whitespace is ignored."""
    assert render_markdown("   para  \n\t- item ") == "<p>para</p><ul><li>item</li></ul>"


def test_bold_before_italic():
    """Bold markers are consumed before italic ones."""
    assert render_markdown("**a** *b*") == "<p><strong>a</strong> <em>b</em></p>"


def test_escaping_happens_once():
    """Literal ampersands are escaped exactly once."""
    assert render_markdown("Tom & Jerry") == "<p>Tom &amp; Jerry</p>"
    assert render_markdown("&amp;") == "<p>&amp;amp;</p>"


def test_escapes_quotes_and_tags():
    """All five HTML-significant characters are escaped."""
    html = process_inline("<b>say \"hi\" it's</b>")
    assert html == "&lt;b&gt;say &quot;hi&quot; it&#39;s&lt;/b&gt;"


def test_inline_link():
    """Links open in a new tab and keep escaped query strings."""
    html = render_markdown("[site](https://x.io/?a=1&b=2)")
    assert html == (
        '<p><a href="https://x.io/?a=1&amp;b=2" target="_blank" '
        'rel="noopener noreferrer">site</a></p>'
    )


def test_inline_code_is_escaped():
    """Markup inside backticks is shown, not interpreted."""
    assert render_markdown("use `<div>`") == "<p>use <code>&lt;div&gt;</code></p>"


def test_unbalanced_markup_falls_through():
    """Stray markers stay as text."""
    assert render_markdown("**bold") == "<p>**bold</p>"
    assert render_markdown("[label](") == "<p>[label](</p>"


def test_image_without_handler_is_dropped():
    """Images are not rendered without a handler."""
    assert render_markdown("![x](screenshots/ru/a.png)") == ""


def test_image_with_handler():
    """Screenshot images go through the handler with file name and alt."""
    calls = []

    def handler(file_name, alt):
        calls.append((file_name, alt))
        return f"<img {file_name} {alt}>"

    html = render_markdown("![shot](../screenshots/en/dir/a.png)", handler)
    assert html == "<img a.png shot>"
    assert calls == [("a.png", "shot")]


def test_image_outside_screenshot_dir_is_dropped():
    """Only screenshots/ru/ and screenshots/en/ paths reach the handler."""
    calls = []
    html = render_markdown("![x](images/a.png)", lambda f, a: calls.append(f) or "IMG")
    assert html == ""
    assert calls == []


def test_image_handler_returning_nothing():
    """An empty handler result drops the image."""
    assert render_markdown("![x](screenshots/ru/a.png)", lambda f, a: None) == ""
    assert render_markdown("![x](screenshots/ru/a.png)", lambda f, a: "") == ""


def test_image_closes_list():
    """An image line ends the current list."""
    html = render_markdown("- a\n![x](screenshots/ru/b.png)\n- c", lambda f, a: "IMG")
    assert html == "<ul><li>a</li></ul>IMG<ul><li>c</li></ul>"


def test_inline_image_is_paragraph():
    """An image sharing a line with text is plain paragraph text."""
    html = render_markdown("see ![x](screenshots/ru/a.png)")
    assert html.startswith("<p>see ")


def test_newline_separator():
    """The newline option separates every element."""
    html = render_markdown("# T\n- a", newline="\n")
    assert html == "<h1>T</h1>\n<ul>\n<li>a</li>\n</ul>\n"


def test_render_is_deterministic():
    """Same input, same output."""
    text = "# T\n\n1. **a**\n2. `b`\n\nplain [l](u)"
    assert render_markdown(text) == render_markdown(text)


def test_render_line_state():
    """The list state is threaded through explicitly."""
    state, out = render_line(ListState.NO_LIST, "- a")
    assert state is ListState.IN_LIST
    assert out == ["<ul>", "<li>a</li>"]

    state, out = render_line(state, "- b")
    assert state is ListState.IN_LIST
    assert out == ["<li>b</li>"]

    state, out = render_line(state, "")
    assert state is ListState.NO_LIST
    assert out == ["</ul>"]


def test_renderer_class():
    """MarkdownRenderer wraps render_markdown."""
    renderer = MarkdownRenderer(newline="\n")
    assert renderer.render("text") == "<p>text</p>\n"


def test_markdown_to_plain():
    """Markdown is flattened for meta descriptions."""
    text = "# Title\n\n**Bold** and *it* [link](http://x)"
    assert markdown_to_plain(text) == "Title Bold and it link"
    assert len(markdown_to_plain("a" * 200)) == 160
    assert markdown_to_plain(None) == ""
