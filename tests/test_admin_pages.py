"""
Admin page rendering. Pages are Jinja2 templates behind the session gate.
"""

from fastapi.testclient import TestClient

from app.api.admin import ADMIN_SECTIONS, jinja_env


def test_login_page_renders_form_without_nav(client: TestClient):
    response = client.get("/admin/login")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert 'id="login-form"' in response.text
    assert 'id="logout"' not in response.text


def test_dashboard_lists_every_section(auth_client: TestClient):
    response = auth_client.get("/admin")

    assert response.status_code == 200
    assert 'id="logout"' in response.text
    for slug, section in ADMIN_SECTIONS.items():
        assert f'href="/admin/{slug}"' in response.text
        assert section["api"] in response.text


def test_projects_page_wires_reorder_endpoint(auth_client: TestClient):
    response = auth_client.get("/admin/projects")

    assert response.status_code == 200
    assert 'const api = "/projects";' in response.text
    assert "/reorder" in response.text


def test_unknown_section_is_not_found(auth_client: TestClient):
    response = auth_client.get("/admin/settings")

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("text/html")


def test_templates_escape_context_values():
    html = jinja_env.get_template("admin/dashboard.html").render(
        title="<script>alert(1)</script>",
        sections=ADMIN_SECTIONS,
        show_nav=False,
        login_path="/admin/login",
        home_path="/admin",
    )

    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "<script>alert(1)</script>" not in html
