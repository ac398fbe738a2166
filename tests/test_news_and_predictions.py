"""Service tests for league news and fan predictions."""
import pytest

from app.core.exceptions import GameNotFoundError, NewsNotFoundError, ValidationError
from app.models import Prediction
from app.services.league import GameService, NewsService, PredictionService
from app.services.league.news_service import make_excerpt


class TestNewsService:

    def test_publish_and_list_newest_first(self, db_session, users):
        service = NewsService(db_session)
        first = service.publish(users["admin"], "Week 1 recap", "Aces roll.")
        second = service.publish(users["admin"], "Trade news", "Comets sign a QB.", excerpt="Big signing")

        articles = service.list_articles()

        assert {a.id for a in articles} == {first.id, second.id}
        assert articles[0].created_at >= articles[1].created_at
        assert second.excerpt == "Big signing"
        assert first.excerpt == "Aces roll."
        assert first.author.username == "commish"

    def test_excerpt_is_cut_at_a_word(self):
        excerpt = make_excerpt("word " * 100, length=22)
        assert excerpt == "word word word word..."

    def test_blank_post_is_rejected(self, db_session, users):
        with pytest.raises(ValidationError):
            NewsService(db_session).publish(users["admin"], "  ", "body")

    def test_delete(self, db_session, users):
        service = NewsService(db_session)
        article = service.publish(users["admin"], "Title", "Body")

        service.delete_article(article.id)

        with pytest.raises(NewsNotFoundError):
            service.get_article(article.id)
        with pytest.raises(NewsNotFoundError):
            service.delete_article(article.id)


class TestPredictionService:

    def test_vote_and_summary(self, db_session, users, scheduled_game):
        service = PredictionService(db_session)
        service.vote(users["alice"].id, scheduled_game.id, "Aces")
        service.vote(users["bob"].id, scheduled_game.id, "Aces")
        service.vote(users["admin"].id, scheduled_game.id, "Bears")

        summary = service.summary(scheduled_game.id)

        assert summary["total"] == 3
        assert summary["team1"] == {"team": "Aces", "votes": 2, "percentage": 67}
        assert summary["team2"] == {"team": "Bears", "votes": 1, "percentage": 33}
        assert len(summary["predictions"]) == 3

    def test_summary_without_votes(self, db_session, scheduled_game):
        summary = PredictionService(db_session).summary(scheduled_game.id)
        assert summary["total"] == 0
        assert summary["team1"]["percentage"] == summary["team2"]["percentage"] == 0

    def test_one_vote_per_game(self, db_session, users, scheduled_game):
        service = PredictionService(db_session)
        service.vote(users["alice"].id, scheduled_game.id, "Aces")
        with pytest.raises(ValidationError):
            service.vote(users["alice"].id, scheduled_game.id, "Bears")
        assert db_session.query(Prediction).count() == 1

    def test_team_must_be_playing(self, db_session, users, scheduled_game):
        with pytest.raises(ValidationError):
            PredictionService(db_session).vote(users["alice"].id, scheduled_game.id, "Comets")

    def test_final_game_is_closed(self, db_session, users, make_game):
        game = make_game(team1_score=21, team2_score=7, quarter="FINAL", is_final=True)
        with pytest.raises(ValidationError):
            PredictionService(db_session).vote(users["alice"].id, game.id, "Aces")

    def test_unknown_game(self, db_session, users):
        with pytest.raises(GameNotFoundError):
            PredictionService(db_session).summary("missing")

    def test_votes_go_with_deleted_game(self, db_session, users, scheduled_game):
        PredictionService(db_session).vote(users["alice"].id, scheduled_game.id, "Aces")

        GameService(db_session).delete_game(scheduled_game.id)

        assert db_session.query(Prediction).count() == 0
