# codehub/utils/seed_files.py
from typing import List, Tuple


def _default_html(name: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{name}</title>
    <link rel="stylesheet" href="style.css">
</head>
<body>
    <div class="container">
        <h1>Welcome to {name}</h1>
        <p>Start building your amazing web project!</p>
    </div>
    <script src="script.js"></script>
</body>
</html>"""


def _default_css(name: str) -> str:
    return f"""/* {name} Styles */
.container {{
    max-width: 800px;
    margin: 0 auto;
    padding: 2rem;
    font-family: Arial, sans-serif;
}}

h1 {{
    color: #333;
    text-align: center;
    margin-bottom: 1rem;
}}

p {{
    color: #666;
    text-align: center;
    font-size: 1.1rem;
}}"""


def _default_js(name: str) -> str:
    return f"""// {name} JavaScript
console.log('Welcome to {name}!');

// Add your JavaScript code here
document.addEventListener('DOMContentLoaded', function() {{
    console.log('Page loaded successfully!');
}});"""


def generate_seed_files(project_name: str) -> List[Tuple[str, str, str]]:
    """
    새 프로젝트에 넣을 기본 파일 3개를 (이름, 유형, 내용) 튜플로 반환합니다.
    같은 프로젝트 이름이면 항상 같은 내용이 만들어집니다.
    """
    return [
        ("index.html", "html", _default_html(project_name)),
        ("style.css", "css", _default_css(project_name)),
        ("script.js", "js", _default_js(project_name)),
    ]
