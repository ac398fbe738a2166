"""Service tests for user registration and administration."""
import pytest

from app.core.exceptions import UserNotFoundError, ValidationError
from app.models import Bet
from app.repositories import UserRepository
from app.services.betting import BetLedger
from app.services.league import NewsService, UserService


class TestUserService:

    def test_create_user_issues_api_key(self, db_session):
        user, api_key = UserService(db_session).create_user("commish", role="admin")

        assert len(api_key) == 48
        assert UserRepository(db_session).find_by_api_key(api_key).id == user.id
        assert user.coins is None

    def test_duplicate_username(self, db_session):
        service = UserService(db_session)
        service.create_user("alice")
        with pytest.raises(ValidationError):
            service.create_user("alice")

    def test_invalid_role(self, db_session):
        with pytest.raises(ValidationError):
            UserService(db_session).create_user("eve", role="owner")

    def test_rotate_key(self, db_session):
        service = UserService(db_session)
        _, old_key = service.create_user("alice", coins=50)

        new_key = service.rotate_api_key("alice")

        repo = UserRepository(db_session)
        assert new_key != old_key
        assert repo.find_by_api_key(old_key) is None
        assert repo.find_by_api_key(new_key).coins == 50

    def test_rotate_unknown_user(self, db_session):
        with pytest.raises(UserNotFoundError):
            UserService(db_session).rotate_api_key("ghost")


class TestUserAdministration:

    def test_list_users_hides_api_keys(self, db_session, users):
        service = UserService(db_session)
        rows = [service.serialize(u) for u in service.list_users()]

        assert [r["username"] for r in rows] == ["alice", "bob", "commish"]
        assert all("apiKey" not in r and "api_key" not in r for r in rows)
        assert rows[1]["coins"] == 1000

    def test_set_role(self, db_session, users):
        user = UserService(db_session).set_role(users["alice"].id, "streamer", acting_user=users["admin"])
        assert user.role == "streamer"

    def test_cannot_change_own_role(self, db_session, users):
        with pytest.raises(ValidationError):
            UserService(db_session).set_role(users["admin"].id, "user", acting_user=users["admin"])

    def test_invalid_role_change(self, db_session, users):
        with pytest.raises(ValidationError):
            UserService(db_session).set_role(users["alice"].id, "owner", acting_user=users["admin"])

    def test_delete_user_removes_their_bets(self, db_session, users, scheduled_game):
        BetLedger(db_session).place_bet(users["alice"].id, scheduled_game.id, "Aces", 10, odds=2.0)
        service = UserService(db_session)

        service.delete_user(users["alice"].id, acting_user=users["admin"])

        assert UserRepository(db_session).find_by_username("alice") is None
        assert db_session.query(Bet).count() == 0

    def test_deleted_author_leaves_articles(self, db_session, users):
        article = NewsService(db_session).publish(users["alice"], "Fan column", "Go Aces.")

        UserService(db_session).delete_user(users["alice"].id, acting_user=users["admin"])

        kept = NewsService(db_session).get_article(article.id)
        assert kept.author_id is None
        assert kept.author is None

    def test_cannot_delete_yourself(self, db_session, users):
        with pytest.raises(ValidationError):
            UserService(db_session).delete_user(users["admin"].id, acting_user=users["admin"])

    def test_delete_unknown_user(self, db_session, users):
        with pytest.raises(UserNotFoundError):
            UserService(db_session).delete_user("ghost", acting_user=users["admin"])
