from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from notaps.engine.scorer import FEEDBACK_MESSAGES, Grade
from notaps.main import app
from notaps.models.learning_progress import LearningProgress
from notaps.services.study_session_service import StudySessionService
from notaps.utils.database import get_db


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "running"


def test_get_vocabulary(client):
    response = client.get("/api/vocabulary")
    assert response.status_code == 200
    data = response.json()
    assert [w["word"] for w in data] == ["hello", "beautiful", "opportunity"]
    assert data[0]["translations"]["ja"]["word"] == "こんにちは"


def test_get_vocabulary_filters(client):
    response = client.get("/api/vocabulary", params={"language": "all", "difficulty": "beginner"})
    assert [w["word"] for w in response.json()] == ["hello"]

    response = client.get("/api/vocabulary", params={"language": "en", "difficulty": "all", "limit": 2})
    assert len(response.json()) == 2


def test_get_word(client):
    assert client.get("/api/vocabulary/2").json()["word"] == "beautiful"

    response = client.get("/api/vocabulary/999")
    assert response.status_code == 404
    assert response.json() == {"error": "单词不存在"}


def test_vocabulary_fallback_when_database_is_down(client):
    def broken_db():
        db = Mock()
        db.query.side_effect = OperationalError("SELECT 1", {}, Exception("database is down"))
        yield db

    app.dependency_overrides[get_db] = broken_db
    response = client.get("/api/vocabulary")
    assert response.status_code == 200
    assert [w["word"] for w in response.json()] == ["hello"]

    response = client.get("/api/progress")
    assert response.status_code == 200
    assert response.json()["currentLevel"] == 1
    assert response.json()["completedLessons"] == 0


def test_practice_pronunciation(client):
    response = client.post("/api/practice/pronunciation",
                           json={"targetText": "hello", "spokenText": "helo"})
    assert response.status_code == 200
    data = response.json()
    assert data["targetText"] == "hello"
    assert data["spokenText"] == "helo"
    assert data["accuracy"] == 80
    assert data["grade"] == "B"
    assert data["feedback"] == FEEDBACK_MESSAGES["ja"][Grade.B]
    assert data["mastery"] is None


def test_practice_pronunciation_rounds_accuracy(client):
    response = client.post("/api/practice/pronunciation",
                           json={"targetText": "beautiful", "spokenText": "beatiful"})
    assert response.json()["accuracy"] == 89
    assert response.json()["grade"] == "B"


def test_practice_pronunciation_records_study(client):
    response = client.post("/api/practice/pronunciation",
                           json={"targetText": "hello", "spokenText": "Hello!", "wordId": 1, "confidence": 0.9})
    assert response.status_code == 200
    data = response.json()
    assert data["confidence"] == 0.9
    assert data["mastery"]["wordId"] == 1
    assert data["mastery"]["studyCount"] == 1
    assert data["mastery"]["correctCount"] == 1
    assert data["mastery"]["pronunciationScores"] == [100]
    assert data["mastery"]["masteryLevel"] == "studying"


def test_practice_pronunciation_invalid_input(client):
    response = client.post("/api/practice/pronunciation", json={"targetText": "hello", "spokenText": None})
    assert response.status_code == 400
    assert "error" in response.json()

    response = client.post("/api/practice/pronunciation", json={"targetText": "", "spokenText": "hello"})
    assert response.status_code == 400


def test_practice_pronunciation_unknown_word(client):
    response = client.post("/api/practice/pronunciation",
                           json={"targetText": "hello", "spokenText": "hello", "wordId": 999})
    assert response.status_code == 404


def test_progress(client):
    data = client.get("/api/progress").json()
    assert data == {
        "currentLevel": 1,
        "completedLessons": 0,
        "pronunciationScore": 0.0,
        "vocabularyMastered": 0,
        "totalStudyTime": 0,
        "streakDays": 0
    }

    data = client.post("/api/progress/update",
                       json={"lesson": "pronunciation", "score": 78.5, "timeSpent": 12}).json()
    assert data["completedLessons"] == 1
    assert data["pronunciationScore"] == 78.5
    assert data["totalStudyTime"] == 12

    data = client.post("/api/progress/update", json={"lesson": "pronunciation", "score": 50}).json()
    assert data["completedLessons"] == 2
    assert data["pronunciationScore"] == 78.5
    assert data["totalStudyTime"] == 17


def test_mastery_endpoints(client):
    data = client.get("/api/mastery/2").json()
    assert data["masteryLevel"] == "new"
    assert data["studyCount"] == 0

    for _ in range(5):
        response = client.post("/api/mastery/2/study", json={"correct": True, "pronunciationScore": 90})
        assert response.status_code == 200
    assert response.json()["masteryLevel"] == "mastered"

    assert client.get("/api/progress").json()["vocabularyMastered"] == 1
    assert [r["wordId"] for r in client.get("/api/mastery", params={"level": "mastered"}).json()] == [2]
    assert client.get("/api/mastery", params={"level": "learning"}).json() == []


def test_mastery_rejects_bad_score(client):
    response = client.post("/api/mastery/1/study", json={"correct": True, "pronunciationScore": 150})
    assert response.status_code == 400
    assert client.get("/api/mastery/1").json()["studyCount"] == 0


def test_mastery_unknown_word(client):
    assert client.get("/api/mastery/999").status_code == 404
    assert client.post("/api/mastery/999/study", json={"correct": True}).status_code == 404


def test_study_session_flow(client):
    response = client.post("/api/sessions", json={"sessionType": "pronunciation"})
    assert response.status_code == 201
    session_id = response.json()["id"]
    assert response.json()["sessionType"] == "pronunciation"
    assert response.json()["endTime"] is None

    client.post(f"/api/sessions/{session_id}/answers", json={"correct": True, "pronunciationScore": 90, "wordId": 1})
    data = client.post(f"/api/sessions/{session_id}/answers",
                       json={"correct": False, "pronunciationScore": 50, "wordId": 3}).json()
    assert data["totalAnswers"] == 2
    assert data["correctAnswers"] == 1
    assert data["accuracy"] == 0.5
    assert data["averagePronunciationScore"] == 70
    assert data["wordsStudied"] == [1, 3]
    assert client.get("/api/mastery/1").json()["studyCount"] == 1

    data = client.post(f"/api/sessions/{session_id}/end").json()
    assert data["endTime"] is not None

    response = client.post(f"/api/sessions/{session_id}/answers", json={"correct": True})
    assert response.status_code == 409


def test_study_session_not_found(client):
    assert client.get("/api/sessions/999").status_code == 404
    assert client.post("/api/sessions/999/answers", json={"correct": True}).status_code == 404
    assert client.post("/api/sessions/999/end").status_code == 404


@pytest.mark.parametrize("body", [
    '{"lesson": "pronunciation", "score": 150}',
    '{"lesson": "pronunciation", "score": -1}',
    '{"lesson": "pronunciation", "score": Infinity}',
])
def test_progress_update_rejects_bad_score(client, body):
    response = client.post("/api/progress/update", content=body,
                           headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert "error" in response.json()

    data = client.get("/api/progress").json()
    assert data["pronunciationScore"] == 0.0
    assert data["completedLessons"] == 0


def test_progress_update_stores_mastered_count(client, db_session):
    for _ in range(5):
        client.post("/api/mastery/1/study", json={"correct": True, "pronunciationScore": 95})
    client.post("/api/progress/update", json={"lesson": "vocabulary", "score": 90})

    assert db_session.query(LearningProgress).one().vocabulary_mastered == 1


def test_vocabulary_rejects_unknown_filters(client):
    response = client.get("/api/vocabulary", params={"language": "xx"})
    assert response.status_code == 400
    assert "error" in response.json()

    response = client.get("/api/vocabulary", params={"difficulty": "expert"})
    assert response.status_code == 400


def test_session_answer_for_unknown_word(client):
    session_id = client.post("/api/sessions", json={"sessionType": "review"}).json()["id"]
    response = client.post(f"/api/sessions/{session_id}/answers", json={"correct": True, "wordId": 999})
    assert response.status_code == 404
    assert client.get(f"/api/sessions/{session_id}").json()["totalAnswers"] == 0


def test_session_answer_unexpected_error_is_not_a_404(client, monkeypatch):
    def broken_record_answer(*args, **kwargs):
        raise KeyError("words_studied")

    monkeypatch.setattr(StudySessionService, "record_answer", broken_record_answer)
    session_id = client.post("/api/sessions", json={"sessionType": "review"}).json()["id"]
    response = client.post(f"/api/sessions/{session_id}/answers", json={"correct": True})
    assert response.status_code == 500


def test_validation_errors_use_error_shape(client):
    response = client.post("/api/practice/pronunciation",
                           json={"targetText": "hello", "spokenText": "hello", "confidence": 2})
    assert response.status_code == 422
    assert response.json()["error"] == "请求参数不合法"
    assert response.json()["details"]

    response = client.post("/api/mastery/1/study", json={"pronunciationScore": 90})
    assert response.status_code == 422
    assert "error" in response.json()
