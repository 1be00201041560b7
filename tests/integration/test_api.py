"""
Integration test: HTTP API against a temp JSON store.
"""

import pytest


@pytest.fixture
def project(client):
    response = client.post("/api/projects", json={"name": "Checkout study"})
    assert response.status_code == 201
    return response.get_json()


@pytest.fixture
def interview(client, project):
    response = client.post(f"/api/projects/{project['id']}/interviews")
    assert response.status_code == 201
    return response.get_json()


def _section(interview, category_id):
    return next(s for s in interview["sections"] if s["categoryId"] == category_id)


def _question_url(interview, category_id, question_id=None):
    url = f"/api/interviews/{interview['id']}/sections/{category_id}/questions"
    return f"{url}/{question_id}" if question_id else url


class TestProjectsApi:
    """Project CRUD."""

    def test_create_requires_name(self, client):
        response = client.post("/api/projects", json={"name": "  "})
        assert response.status_code == 400
        assert response.get_json()["error"] == "Name required"

    def test_create_and_get(self, client, project):
        assert project["name"] == "Checkout study"
        assert project["interviewCount"] == 0

        response = client.get(f"/api/projects/{project['id']}")
        assert response.get_json()["name"] == "Checkout study"

    def test_update(self, client, project):
        response = client.patch(f"/api/projects/{project['id']}",
                                json={"name": "Renamed", "description": "Round two"})
        assert response.status_code == 200
        assert response.get_json()["description"] == "Round two"

    def test_rename_to_empty_is_400(self, client, project):
        response = client.patch(f"/api/projects/{project['id']}", json={"name": ""})
        assert response.status_code == 400

    def test_missing_project_is_404(self, client):
        assert client.get("/api/projects/proj_missing").status_code == 404
        assert client.delete("/api/projects/proj_missing").status_code == 404

    def test_delete_cascades(self, client, project, interview):
        response = client.delete(f"/api/projects/{project['id']}")
        assert response.get_json() == {"success": True}
        assert client.get(f"/api/interviews/{interview['id']}").status_code == 404

    def test_non_object_body(self, client):
        response = client.post("/api/projects", json=["not", "an", "object"])
        assert response.status_code == 400


class TestInterviewsApi:
    """Interview editing."""

    def test_create_from_default_template(self, client, project, interview):
        assert interview["metadata"]["participantId"] == "P1"
        assert [s["categoryId"] for s in interview["sections"]] == [
            "cat_context", "cat_decisions", "cat_stress", "cat_coping", "cat_impact"]
        assert _section(interview, "cat_stress")["questions"][0]["stressLevel"] == 3
        assert _section(interview, "cat_context")["questions"][0]["stressLevel"] is None

        listing = client.get(f"/api/projects/{project['id']}/interviews").get_json()
        assert [i["id"] for i in listing] == [interview["id"]]
        assert client.get(f"/api/projects/{project['id']}").get_json()["interviewCount"] == 1

    def test_update_metadata(self, client, interview):
        response = client.patch(f"/api/interviews/{interview['id']}",
                                json={"metadata": {"city": "Oslo", "mode": "Transcript"}})
        assert response.status_code == 200
        assert response.get_json()["metadata"]["city"] == "Oslo"

    def test_bad_mode_is_400(self, client, interview):
        response = client.patch(f"/api/interviews/{interview['id']}", json={"mode": "Carrier pigeon"})
        assert response.status_code == 400
        assert "details" in response.get_json()

    def test_notes_are_auto_tagged(self, client, interview):
        qid = _section(interview, "cat_stress")["questions"][0]["id"]

        response = client.patch(_question_url(interview, "cat_stress", qid),
                                json={"notes": "It was so slow, I keep a spreadsheet"})

        data = response.get_json()
        assert response.status_code == 200
        assert data["tags"] == ["b_workaround", "f_time"]
        assert data["addedTags"] == ["b_workaround", "f_time"]

        stored = client.get(f"/api/interviews/{interview['id']}").get_json()
        assert _section(stored, "cat_stress")["questions"][0]["tags"] == ["b_workaround", "f_time"]

    def test_auto_tag_can_be_skipped(self, client, interview):
        qid = _section(interview, "cat_stress")["questions"][0]["id"]
        response = client.patch(_question_url(interview, "cat_stress", qid),
                                json={"notes": "so slow", "autoTag": False})
        assert response.get_json()["tags"] == []

    def test_live_suggestions_and_leading_flag(self, client, interview):
        qid = _section(interview, "cat_context")["questions"][0]["id"]
        response = client.patch(_question_url(interview, "cat_context", qid),
                                json={"prompt": "Don't you think it's too expensive?",
                                      "notes": "price is hard", "autoTag": False})
        data = response.get_json()
        assert data["leadingQuestion"] is True
        assert data["suggestedTags"] == ["f_usability", "f_time", "m_cost"]

    def test_auto_tag_flag_must_be_boolean(self, client, interview):
        qid = _section(interview, "cat_stress")["questions"][0]["id"]
        response = client.patch(_question_url(interview, "cat_stress", qid),
                                json={"notes": "so slow", "autoTag": "false"})
        assert response.status_code == 400

        stored = client.get(f"/api/interviews/{interview['id']}").get_json()
        assert _section(stored, "cat_stress")["questions"][0]["notes"] == ""

    def test_tag_disabled_category_gets_no_suggestions(self, client, project):
        client.put("/api/template", json=[{"id": "cat_x", "name": "X", "enableTags": False}])
        interview = client.post(f"/api/projects/{project['id']}/interviews").get_json()
        qid = _section(interview, "cat_x")["questions"][0]["id"]

        data = client.patch(_question_url(interview, "cat_x", qid),
                            json={"notes": "so slow, always"}).get_json()

        assert data["tags"] == []
        assert data["addedTags"] == []
        assert data["suggestedTags"] == []

    def test_bad_stress_is_400(self, client, interview):
        qid = _section(interview, "cat_stress")["questions"][0]["id"]
        response = client.patch(_question_url(interview, "cat_stress", qid), json={"stressLevel": 7})
        assert response.status_code == 400

    def test_add_duplicate_delete_question(self, client, interview):
        added = client.post(_question_url(interview, "cat_coping"))
        assert added.status_code == 201
        qid = added.get_json()["id"]

        copy = client.post(_question_url(interview, "cat_coping", qid) + "/duplicate")
        assert copy.status_code == 201
        assert copy.get_json()["id"] != qid

        assert client.delete(_question_url(interview, "cat_coping", qid)).status_code == 200
        stored = client.get(f"/api/interviews/{interview['id']}").get_json()
        assert len(_section(stored, "cat_coping")["questions"]) == 2

    def test_unknown_question_is_404(self, client, interview):
        response = client.delete(_question_url(interview, "cat_coping", "q_missing"))
        assert response.status_code == 404

    def test_unknown_section_is_404(self, client, interview):
        assert client.post(_question_url(interview, "cat_nope")).status_code == 404

    def test_toggle_tag(self, client, interview):
        qid = _section(interview, "cat_context")["questions"][0]["id"]
        url = _question_url(interview, "cat_context", qid) + "/tags/f_time/toggle"

        on = client.post(url).get_json()
        assert on["applied"] is True
        assert on["tags"] == ["f_time"]

        off = client.post(url).get_json()
        assert off["applied"] is False
        stored = client.get(f"/api/interviews/{interview['id']}").get_json()
        assert _section(stored, "cat_context")["questions"][0]["tags"] == []

    def test_toggle_unknown_tag(self, client, interview):
        qid = _section(interview, "cat_context")["questions"][0]["id"]
        url = _question_url(interview, "cat_context", qid) + "/tags/x_nope/toggle"
        assert client.post(url).status_code == 404

    def test_toggle_removes_tag_outside_catalog(self, client, interview):
        qid = _section(interview, "cat_impact")["questions"][0]["id"]
        client.patch(_question_url(interview, "cat_impact", qid), json={"notes": "I will cancel"})

        url = _question_url(interview, "cat_impact", qid) + "/tags/i_churn/toggle"
        data = client.post(url).get_json()

        assert data["applied"] is False
        assert "i_churn" not in data["tags"]

    def test_toggle_on_tag_disabled_category(self, client, project):
        client.put("/api/template", json=[{"id": "cat_x", "name": "X", "enableTags": False}])
        interview = client.post(f"/api/projects/{project['id']}/interviews").get_json()
        qid = _section(interview, "cat_x")["questions"][0]["id"]

        response = client.post(_question_url(interview, "cat_x", qid) + "/tags/f_time/toggle")
        assert response.status_code == 400

    def test_generated_notes(self, client, interview):
        qid = _section(interview, "cat_impact")["questions"][0]["id"]
        response = client.post(
            f"/api/interviews/{interview['id']}/sections/cat_impact/generated-notes",
            json={"notes": [{"questionId": qid, "note": "I might cancel soon"}]},
        )
        data = response.get_json()
        assert response.status_code == 200
        assert data["addedTags"] == {qid: ["i_churn"]}
        assert _section(data["interview"], "cat_impact")["questions"][0]["notes"] == "I might cancel soon"

    def test_delete_interview(self, client, interview):
        assert client.delete(f"/api/interviews/{interview['id']}").status_code == 200
        assert client.delete(f"/api/interviews/{interview['id']}").status_code == 404


class TestExportApi:
    """Interview export."""

    def test_json_export(self, client, interview):
        response = client.get(f"/api/interviews/{interview['id']}/export")
        assert response.status_code == 200
        assert response.mimetype == "application/json"
        assert response.get_json()["id"] == interview["id"]

    def test_text_export(self, client, interview):
        response = client.get(f"/api/interviews/{interview['id']}/export?format=text")
        assert response.mimetype == "text/plain"
        assert response.get_data(as_text=True).startswith("Participant ID: P1")

    def test_unknown_format(self, client, interview):
        response = client.get(f"/api/interviews/{interview['id']}/export?format=pdf")
        assert response.status_code == 400


class TestTagsApi:
    """Tag catalog, custom tags, auto-tag and suggestions."""

    def test_list_predefined(self, client):
        tags = client.get("/api/tags").get_json()
        assert len(tags) == 34
        assert tags[0]["id"] == "b_routine"

    def test_search_and_filter(self, client):
        names = [t["name"] for t in client.get("/api/tags?q=fatigue").get_json()]
        assert names == ["mental-fatigue", "decision-fatigue"]
        friction = client.get("/api/tags?category=Friction").get_json()
        assert len(friction) == 10

    def test_create_custom_tag(self, client):
        response = client.post("/api/tags", json={"name": "Dark Mode", "category": "Friction"})
        assert response.status_code == 201
        tag = response.get_json()
        assert tag["name"] == "dark-mode"
        assert tag["isCustom"] is True

        again = client.post("/api/tags", json={"name": "dark mode"})
        assert again.status_code == 200
        assert again.get_json()["id"] == tag["id"]
        assert len(client.get("/api/tags").get_json()) == 35

    def test_create_tag_validation(self, client):
        assert client.post("/api/tags", json={"name": " "}).status_code == 400
        assert client.post("/api/tags", json={"name": "x", "category": "Mood"}).status_code == 400

    def test_custom_tag_used_by_auto_tag(self, client):
        client.post("/api/tags", json={"name": "dark mode"})
        response = client.post("/api/tags/auto-tag", json={"text": "Loves dark-mode, hates waiting"})
        assert len(response.get_json()["tagIds"]) == 1
        assert response.get_json()["tagIds"][0].startswith("c_")

    def test_auto_tag(self, client):
        response = client.post("/api/tags/auto-tag", json={"text": "A waste of time"})
        assert response.get_json() == {"tagIds": ["f_time"]}

    def test_suggest(self, client):
        response = client.post("/api/tags/suggest",
                               json={"text": "always slow", "exclude": ["b_habit"],
                                     "prompt": "Would you like a faster app?"})
        assert response.get_json() == {"tagIds": ["f_time", "b_routine"], "leadingQuestion": True}


class TestTemplateApi:
    """Template editing and application."""

    def test_default(self, client):
        names = [c["name"] for c in client.get("/api/template").get_json()]
        assert names == ["Context", "Decisions", "Stress", "Coping", "Impact"]

    def test_save(self, client):
        body = [{"id": "cat_x", "name": "X", "enableStress": True}]
        assert client.put("/api/template", json=body).status_code == 200
        saved = client.get("/api/template").get_json()
        assert saved == [{"id": "cat_x", "name": "X", "enableStress": True, "enableTags": True}]

    def test_save_rejects_duplicates(self, client):
        body = {"categories": [{"id": "a", "name": "A"}, {"id": "a", "name": "B"}]}
        assert client.put("/api/template", json=body).status_code == 400

    def test_apply(self, client, interview):
        categories = [
            {"id": "cat_stress", "name": "Stress", "enableStress": True},
            {"id": "cat_new", "name": "New"},
        ]
        response = client.post("/api/template/apply", json={"categories": categories})
        assert response.get_json() == {"updated": 1}

        stored = client.get(f"/api/interviews/{interview['id']}").get_json()
        assert [s["categoryId"] for s in stored["sections"]] == ["cat_stress", "cat_new"]
        assert len(_section(stored, "cat_stress")["questions"]) == 1


class TestInsightsApi:
    """Project insights."""

    def test_missing_project(self, client):
        assert client.get("/api/projects/proj_missing/insights").status_code == 404

    def test_empty_project(self, client, project):
        data = client.get(f"/api/projects/{project['id']}/insights").get_json()
        assert data["total_interviews"] == 0
        assert data["highest_stress_category"] is None

    def test_undecodable_interview_file_skipped(self, client, project, interview, temp_dir):
        bad = temp_dir / "projects" / project["id"] / "interviews" / "int_bad.json"
        bad.write_bytes(b"\xff\xfe")

        response = client.get(f"/api/projects/{project['id']}/insights")

        assert response.status_code == 200
        assert response.get_json()["total_interviews"] == 1

    def test_insights_track_edits(self, client, project, interview):
        qid = _section(interview, "cat_coping")["questions"][0]["id"]
        url = f"/api/projects/{project['id']}/insights"

        before = client.get(url).get_json()
        assert before["overall_avg_stress"] == 3

        client.patch(_question_url(interview, "cat_coping", qid),
                     json={"stressLevel": 5, "notes": "so slow, I use a spreadsheet"})
        after = client.get(url).get_json()

        assert after["overall_avg_stress"] == 3.7
        assert after["highest_stress_category"]["name"] == "Coping"
        assert after["top_friction_tag"]["id"] == "f_time"
        assert after["segment_counts"]["High-Friction Users"] == 1
