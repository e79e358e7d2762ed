import json

from src.core.exceptions import StorageError
from src.helpers.jwt_handler import JWT
from src.models.quiz_result import QuizResultBase
from src.repositories import get_quiz_repository
from tests.fakes import PASSWORD


def submit(client, headers, quiz_id, selections, **extra):
    answers = [
        {"question_id": f"q{i}", "selected_answer": sel}
        for i, sel in enumerate(selections, start=1)
    ]
    return client.post("/api/results/", json={"quiz_id": quiz_id, "answers": answers, **extra}, headers=headers)


def test_signup_then_login(client):
    response = client.post("/api/auth/signup", json={
        "name": "New Student", "email": "New@Example.com", "password": PASSWORD,
    })
    assert response.status_code == 200
    assert response.json()["user"]["role"] == "student"

    response = client.post("/api/auth/login", json={"email": "new@example.com", "password": PASSWORD})
    assert response.status_code == 200
    body = response.json()
    assert JWT.decode(body["token"])["sub"] == body["user"]["id"]
    assert body["user"]["last_login"] is not None
    assert "password" not in body["user"]


def test_signup_duplicate_email(client, student):
    response = client.post("/api/auth/signup", json={
        "name": "Again", "email": student.email, "password": PASSWORD,
    })

    assert response.status_code == 400


def test_login_checks_password_and_role(client, student, admin):
    wrong = client.post("/api/auth/login", json={"email": student.email, "password": "nope-nope"})
    assert wrong.status_code == 401

    student_as_admin = client.post("/api/auth/login", json={
        "email": student.email, "password": PASSWORD, "user_type": "admin",
    })
    assert student_as_admin.status_code == 403

    admin_as_student = client.post("/api/auth/login", json={"email": admin.email, "password": PASSWORD})
    assert admin_as_student.status_code == 403

    admin_login = client.post("/api/auth/login", json={
        "email": admin.email, "password": PASSWORD, "user_type": "admin",
    })
    assert admin_login.status_code == 200


def test_requests_need_a_valid_token(client):
    assert client.get("/api/results/").status_code == 401
    assert client.get("/api/results/", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401

    expired = JWT.encode({"sub": "user-1", "role": "student"}, expires_minutes=-1)
    response = client.get("/api/results/", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 401


def test_admin_routes_reject_students(client, student_headers):
    assert client.get("/api/admin/quizzes", headers=student_headers).status_code == 403
    assert client.delete("/api/admin/results?id=x", headers=student_headers).status_code == 403


def test_student_quiz_view_has_no_answers(client, student_headers, quiz):
    response = client.get(f"/api/quizzes/{quiz.id}", headers=student_headers)

    assert response.status_code == 200
    question = response.json()["questions"][0]
    assert set(question) == {"id", "section", "question", "options"}


def test_submit_and_read_back(client, student_headers, quiz):
    response = submit(client, student_headers, quiz.id, [1, 2, 1, -1], time_spent=420)

    assert response.status_code == 200
    result = response.json()["result"]
    assert result["total_score"] == 44
    assert result["raw_score"] == 1.75
    assert result["positive_marks"] == 2
    assert result["negative_marks"] == 0.25
    assert (result["correct_answers"], result["wrong_answers"], result["unanswered"]) == (2, 1, 1)
    assert result["sections"] == {"reasoning": 100, "quantitative": 0}
    assert result["negative_marking"] is True
    assert result["negative_mark_value"] == 0.25

    listed = client.get("/api/results/", headers=student_headers).json()["results"]
    assert [r["id"] for r in listed] == [result["id"]]

    one = client.get(f"/api/results/{result['id']}", headers=student_headers)
    assert one.json()["result"]["time_spent"] == 420

    recent = client.get("/api/results/recent", headers=student_headers).json()["attempts"]
    assert recent[0]["id"] == result["id"]

    me = client.get("/api/profile/me", headers=student_headers).json()
    assert (me["total_quizzes"], me["average_score"]) == (1, 44)


def test_submit_validation_errors(client, student_headers, quiz):
    assert submit(client, student_headers, "quiz-missing", [1]).status_code == 404
    assert submit(client, student_headers, quiz.id, [1, 1, 1, 1, 1]).status_code == 400
    assert submit(client, student_headers, quiz.id, [1], time_spent=-5).status_code == 422
    assert client.get("/api/results/", headers=student_headers).json()["results"] == []


def test_admin_deletes_one_result(client, student_headers, admin_headers, quiz):
    first = submit(client, student_headers, quiz.id, [1, 2, 0, 3]).json()["result"]
    second = submit(client, student_headers, quiz.id, [1]).json()["result"]

    response = client.delete(f"/api/admin/results?id={first['id']}", headers=admin_headers)

    assert response.status_code == 200
    listed = client.get("/api/results/", headers=student_headers).json()["results"]
    assert [r["id"] for r in listed] == [second["id"]]
    me = client.get("/api/profile/me", headers=student_headers).json()
    assert (me["total_quizzes"], me["average_score"]) == (1, second["total_score"])

    again = client.delete(f"/api/admin/results?id={first['id']}", headers=admin_headers)
    assert again.status_code == 404
    assert client.delete("/api/admin/results", headers=admin_headers).status_code == 400


def test_admin_quiz_crud_and_analytics(client, admin_headers, student_headers):
    created = client.post("/api/admin/quizzes", headers=admin_headers, json={
        "title": "English Mock",
        "duration": 15,
        "sections": ["english"],
        "negative_mark_value": 0.5,
        "questions": [
            {"section": "english", "question": "Synonym of big", "options": ["large", "tiny", "thin", "low"],
             "correct_answer": 0, "explanation": "large means big"},
            {"section": "english", "question": "Antonym of hot", "options": ["warm", "cold", "mild", "dry"],
             "correct_answer": 1},
        ],
    })
    assert created.status_code == 200
    quiz = created.json()["quiz"]
    assert quiz["negative_mark_value"] == 0.5
    assert quiz["questions"][0]["explanation"] == "large means big"

    question_ids = [q["id"] for q in quiz["questions"]]
    answers = [{"question_id": question_ids[0], "selected_answer": "large"},
               {"question_id": question_ids[1], "selected_answer": 0}]
    response = client.post("/api/results/", headers=student_headers,
                           json={"quiz_id": quiz["id"], "answers": answers, "time_spent": 90})
    # (1 - 0.5) / 2 -> 25
    assert response.json()["result"]["total_score"] == 25

    analytics = client.get("/api/admin/analytics", headers=admin_headers).json()["quizzes"]
    assert analytics[0]["attempts"] == 1
    assert analytics[0]["avg_score"] == 25
    assert analytics[0]["avg_time"] == 90

    progress = client.get("/api/admin/user-progress", headers=admin_headers).json()["progress"]
    assert [(p["attempts"], p["avg_score"]) for p in progress] == [(1, 25)]

    stats = client.get("/api/admin/stats", headers=admin_headers).json()
    assert stats["total_users"] == 2
    assert stats["total_results"] == 1

    patched = client.patch(f"/api/admin/quizzes/{quiz['id']}", headers=admin_headers, json={"is_active": False})
    assert patched.json()["quiz"]["is_active"] is False
    assert client.get("/api/quizzes/", headers=student_headers).json() == []

    assert client.delete(f"/api/admin/quizzes/{quiz['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/admin/quizzes/{quiz['id']}", headers=admin_headers).status_code == 404


def test_admin_question_validation(client, admin_headers, quiz):
    response = client.post(f"/api/admin/quizzes/{quiz.id}/questions", headers=admin_headers, json={
        "section": "english", "question": "?", "options": ["a", "b", "c"], "correct_answer": 0,
    })

    assert response.status_code == 422


def test_subjects_and_chapters(client, admin_headers, student_headers):
    subject = client.post("/api/admin/subjects", headers=admin_headers, json={"name": "Reasoning"}).json()
    chapter = client.post("/api/admin/chapters", headers=admin_headers,
                          json={"subject_id": subject["id"], "name": "Syllogism"}).json()
    client.post("/api/admin/quizzes", headers=admin_headers,
                json={"title": "Syllogism 1", "chapter_id": chapter["id"]})

    chapters = client.get(f"/api/subjects/{subject['id']}/chapters", headers=student_headers).json()
    assert [c["name"] for c in chapters] == ["Syllogism"]
    quizzes = client.get(f"/api/chapters/{chapter['id']}/quizzes", headers=student_headers).json()
    assert [q["title"] for q in quizzes] == ["Syllogism 1"]

    assert client.delete(f"/api/admin/subjects/{subject['id']}", headers=admin_headers).status_code == 400


def test_storage_failure_is_reported_as_503(app, client, student_headers):
    class BrokenQuizRepository:
        async def get(self, quiz_id):
            raise StorageError("connection refused")

    app.dependency_overrides[get_quiz_repository] = lambda: BrokenQuizRepository()

    response = submit(client, student_headers, "quiz-1", [1])

    assert response.status_code == 503
    assert "connection refused" not in response.text


def test_profile_update(client, student_headers, other_student):
    renamed = client.patch("/api/profile/update", headers=student_headers, json={"name": "Renamed Student"})
    assert renamed.status_code == 200
    assert renamed.json()["name"] == "Renamed Student"

    taken = client.patch("/api/profile/update", headers=student_headers, json={"email": other_student.email})
    assert taken.status_code == 400

    moved = client.patch("/api/profile/update", headers=student_headers,
                         json={"email": "Moved@Example.com", "password": "brand-new-pass"})
    assert moved.json()["email"] == "moved@example.com"
    assert "password" not in moved.json()

    old = client.post("/api/auth/login", json={"email": "moved@example.com", "password": PASSWORD})
    assert old.status_code == 401
    new = client.post("/api/auth/login", json={"email": "moved@example.com", "password": "brand-new-pass"})
    assert new.status_code == 200
    assert new.json()["user"]["name"] == "Renamed Student"


def test_admin_edits_subject_and_chapter(client, admin_headers, student_headers):
    subject = client.post("/api/admin/subjects", headers=admin_headers, json={"name": "Reasoning"}).json()
    chapter = client.post("/api/admin/chapters", headers=admin_headers,
                          json={"subject_id": subject["id"], "name": "Syllogism"}).json()

    patched_subject = client.patch(f"/api/admin/subjects/{subject['id']}", headers=admin_headers,
                                   json={"description": "Logical reasoning"}).json()
    patched_chapter = client.patch(f"/api/admin/chapters/{chapter['id']}", headers=admin_headers,
                                   json={"name": "Blood Relations"}).json()

    assert (patched_subject["name"], patched_subject["description"]) == ("Reasoning", "Logical reasoning")
    assert patched_chapter["name"] == "Blood Relations"
    assert patched_chapter["subject_id"] == subject["id"]
    listed = client.get(f"/api/subjects/{subject['id']}/chapters", headers=student_headers).json()
    assert [c["name"] for c in listed] == ["Blood Relations"]
    assert client.patch("/api/admin/chapters/missing", headers=admin_headers,
                        json={"name": "x"}).status_code == 404


def test_quiz_list_filtered_by_chapter(client, admin_headers, student_headers, quiz):
    subject = client.post("/api/admin/subjects", headers=admin_headers, json={"name": "English"}).json()
    chapter = client.post("/api/admin/chapters", headers=admin_headers,
                          json={"subject_id": subject["id"], "name": "Grammar"}).json()
    client.post("/api/admin/quizzes", headers=admin_headers,
                json={"title": "Grammar 1", "chapter_id": chapter["id"]})

    everything = client.get("/api/quizzes/", headers=student_headers).json()
    in_chapter = client.get(f"/api/quizzes/?chapter_id={chapter['id']}", headers=student_headers).json()

    assert len(everything) == 2
    assert [q["title"] for q in in_chapter] == ["Grammar 1"]


def test_student_analytics_route(client, student_headers, quiz):
    submit(client, student_headers, quiz.id, [1, 2, 0, 3])
    submit(client, student_headers, quiz.id, [1, 2, -1, -1])

    analytics = client.get("/api/analytics/", headers=student_headers).json()["analytics"]

    assert analytics["total_attempts"] == 2
    assert analytics["best_score"] == 100
    assert analytics["average_score"] == 75
    assert [p["score"] for p in analytics["performance_trend"]] == [100, 50]
    assert analytics["subject_stats"][0]["subject"] == "Unknown Subject"
    assert client.get("/api/analytics/").status_code == 401


def test_legacy_result_is_readable(client, results, student, student_headers, quiz):
    legacy_answers = [
        {"id": "q1", "section": "reasoning", "selectedAnswer": 1, "correctAnswer": 1, "isCorrect": True},
        {"id": "q2", "section": "reasoning", "selectedAnswer": None, "correctAnswer": 2, "isUnanswered": True},
    ]
    stored = results.store.add(QuizResultBase(
        user_id=student.id, quiz_id=quiz.id, total_score=50, answers=json.dumps(legacy_answers),
    ))

    response = client.get(f"/api/results/{stored.id}", headers=student_headers)

    assert response.status_code == 200
    answers = response.json()["result"]["answers"]
    assert [(a["question_id"], a["outcome"]) for a in answers] == [("q1", "correct"), ("q2", "unanswered")]


def test_question_bank_routes(client, admin_headers, student_headers, quiz):
    question = {
        "section": "banking", "question": "Who prints currency notes in India?",
        "options": ["RBI", "SBI", "Finance Ministry", "SEBI"], "correct_answer": 0,
        "difficulty": "easy", "tags": ["rbi"],
    }
    assert client.post("/api/admin/question-bank", headers=student_headers, json=question).status_code == 403
    assert client.post("/api/admin/question-bank", headers=admin_headers,
                       json={**question, "options": ["RBI"]}).status_code == 422

    created = client.post("/api/admin/question-bank", headers=admin_headers, json=question).json()["question"]
    assert created["difficulty"] == "easy"

    page = client.get("/api/admin/question-bank?difficulty=easy&search=currency", headers=admin_headers).json()
    assert [q["id"] for q in page["questions"]] == [created["id"]]
    assert page["pagination"] == {"page": 1, "limit": 20, "total": 1, "total_pages": 1}
    assert client.get("/api/admin/question-bank?difficulty=extreme", headers=admin_headers).status_code == 422

    updated = client.put(f"/api/admin/question-bank/{created['id']}", headers=admin_headers,
                         json={**question, "correct_answer": 2}).json()["question"]
    assert updated["correct_answer"] == 2

    imported = client.post(f"/api/admin/quizzes/{quiz.id}/import-questions", headers=admin_headers,
                           json={"question_ids": [created["id"]]})
    assert imported.status_code == 200
    assert imported.json()["imported"] == 1
    assert len(imported.json()["quiz"]["questions"]) == 5
    assert client.post(f"/api/admin/quizzes/{quiz.id}/import-questions", headers=admin_headers,
                       json={"question_ids": []}).status_code == 422

    assert client.delete(f"/api/admin/question-bank/{created['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/admin/question-bank/{created['id']}", headers=admin_headers).status_code == 404
