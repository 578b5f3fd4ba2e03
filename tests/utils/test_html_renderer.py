# tests/utils/test_html_renderer.py
import pytest

from codehub.services.exceptions import NoIndexError
from codehub.utils.html_renderer import RenderFile, render_html

INDEX = """<html>
<head>
<title>t</title>
<link rel="stylesheet" href="style.css">
</head>
<body>
<h1>hi</h1>
<script src="script.js"></script>
</body>
</html>"""


def _files(index=INDEX, *extra):
    return [RenderFile("index.html", "index.html", index, "html"), *extra]


def test_linked_stylesheet_is_inlined_in_place():
    """<link>로 참조된 CSS는 그 자리에 <style>로 들어가고 <link>는 사라집니다."""
    # 1. 준비 (Arrange)
    files = _files(INDEX, RenderFile("style.css", "style.css", "body{margin:0}", "css"))

    # 2. 실행 (Act)
    html = render_html(files, "Demo")

    # 3. 단언 (Assert)
    assert '<link rel="stylesheet" href="style.css">' not in html
    assert "<title>t</title>\n<style>\n/* style.css */\nbody{margin:0}\n</style>\n</head>" in html


def test_unreferenced_stylesheet_goes_before_head_close():
    files = _files(INDEX, RenderFile("extra.css", "extra.css", "p{}", "css"))

    html = render_html(files, "Demo")

    assert "  <style>\n/* extra.css */\np{}\n</style>\n</head>" in html
    # 원래 <link>는 대상 파일이 없으므로 그대로 남습니다.
    assert '<link rel="stylesheet" href="style.css">' in html


def test_linked_script_is_inlined_and_unreferenced_script_goes_before_body_close():
    files = _files(
        INDEX,
        RenderFile("script.js", "script.js", "console.log(1)", "js"),
        RenderFile("util.js", "util.js", "var u;", "js"),
    )

    html = render_html(files, "Demo")

    assert '<script src="script.js"></script>' not in html
    assert "<h1>hi</h1>\n<script>\n/* script.js */\nconsole.log(1)\n</script>" in html
    assert "  <script>\n/* util.js */\nvar u;\n</script>\n</body>" in html


def test_files_are_processed_in_given_order():
    files = _files(
        INDEX,
        RenderFile("b.css", "b.css", "B", "css"),
        RenderFile("a.css", "a.css", "A", "css"),
    )

    html = render_html(files, "Demo")

    assert html.index("/* b.css */") < html.index("/* a.css */")


def test_only_first_occurrence_of_a_link_is_replaced():
    index = '<head><link rel="stylesheet" href="s.css"><link rel="stylesheet" href="s.css"></head>'
    files = _files(index, RenderFile("s.css", "s.css", "x", "css"))

    html = render_html(files, "Demo")

    assert html.count("<style>") == 1
    assert html.count('<link rel="stylesheet" href="s.css">') == 1


def test_missing_closing_tags_drop_unreferenced_files_silently():
    """</head>나 </body>가 없으면 참조되지 않은 파일은 삽입되지 않고 오류도 나지 않습니다."""
    index = "<p>fragment</p>"
    files = _files(index, RenderFile("a.css", "a.css", "A", "css"), RenderFile("a.js", "a.js", "J", "js"))

    html = render_html(files, "Demo", deployment_url="https://x/deploy/y")

    assert html == index


def test_duplicated_closing_tags_inject_before_first_only():
    """</head>나 </body>가 두 번 나오면 첫 번째 앞에만 삽입되고 두 번째는 그대로 남습니다."""
    # 1. 준비 (Arrange)
    index = "<html><head><title>a</title></head><head></head><body>x</body><body></body></html>"
    files = _files(index, RenderFile("a.css", "a.css", "A", "css"), RenderFile("a.js", "a.js", "J", "js"))

    # 2. 실행 (Act)
    html = render_html(files, "Demo", deployment_url="https://x/deploy/y")

    # 3. 단언 (Assert)
    assert html.count("<style>") == 1
    assert html.count("<script>") == 1
    assert html.count('<meta name="generator"') == 1
    assert html.count('<meta name="deployment-url"') == 1
    assert html.count('<meta name="project-name"') == 1
    first_head_close = html.index("</head>")
    assert html.index("/* a.css */") < first_head_close
    assert html.index('<meta name="project-name"') < first_head_close
    assert html.index("/* a.js */") < html.index("</body>")
    assert "</head><head></head><body>" in html
    assert "</body><body></body></html>" in html


def test_files_are_read_by_attribute():
    """파일은 속성(name, path, content, file_type)으로 읽으며, 딕셔너리는 받지 않습니다."""
    files = [{"name": "index.html", "path": "index.html", "content": "<p></p>", "file_type": "html"}]

    with pytest.raises(AttributeError):
        render_html(files, "Demo")


def test_deployment_meta_tags_only_when_url_given():
    preview = render_html(_files(), "Demo")
    published = render_html(_files(), "Demo", deployment_url="https://host/deploy/demo-1", generator="CodeHub")

    assert "<meta name=" not in preview
    assert '<meta name="generator" content="CodeHub">' in published
    assert '<meta name="deployment-url" content="https://host/deploy/demo-1">' in published
    assert '<meta name="project-name" content="Demo">\n</head>' in published


def test_missing_project_name_renders_untitled():
    html = render_html(_files(), None, deployment_url="https://host/deploy/x")

    assert '<meta name="project-name" content="Untitled">' in html


def test_rendering_is_deterministic():
    files = _files(INDEX, RenderFile("style.css", "style.css", "a", "css"), RenderFile("x.js", "x.js", "b", "js"))

    assert render_html(files, "Demo", "https://h/deploy/d") == render_html(files, "Demo", "https://h/deploy/d")


def test_index_must_be_named_exactly_index_html():
    files = [RenderFile("Index.html", "Index.html", "<html></html>", "html")]

    with pytest.raises(NoIndexError):
        render_html(files, "Demo")


def test_index_only_project_renders_its_content():
    html = render_html(_files("<html><head></head><body>only</body></html>"), "Demo")

    assert html == "<html><head></head><body>only</body></html>"


def test_none_content_is_treated_as_empty():
    files = _files(INDEX, RenderFile("style.css", "style.css", None, "css"))

    html = render_html(files, "Demo")

    assert "<style>\n/* style.css */\n\n</style>" in html
