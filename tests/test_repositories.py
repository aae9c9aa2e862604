from datetime import datetime, timezone

import psycopg2
import pytest

from models.post import Post
from models.question import Question
from models.user import User
from repositories.errors import CorruptData, NotFound, NotFoundOrNotOwned
from repositories.post_repo import PostRepository
from repositories.question_repo import QuestionRepository
from repositories.user_repo import UserRepository

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _user_row(notification):
    return ("u1", "alice", "hash", True, "delhi", 3, "resident", notification)


class TestUserRepository:

    def test_create_binds_columns_in_order(self, fake_db):
        user = User(username="alice", password="hash", city="delhi", dwelling_age=3, tag="resident", id="u1")
        UserRepository(fake_db).create(user)

        assert fake_db.last_sql.startswith("INSERT INTO users (id, username, password")
        params = fake_db.last_params
        assert params[:7] == ("u1", "alice", "hash", True, "delhi", 3, "resident")
        assert params[7].adapted == []

    def test_find_by_id_decodes_notifications(self, fake_db):
        fake_db.cursor.fetchone.return_value = _user_row(["A", "B"])
        user = UserRepository(fake_db).find_by_id("u1")

        assert user.notification == ["A", "B"]
        assert fake_db.last_sql.endswith("FROM users WHERE id = %s")
        assert fake_db.last_params == ("u1",)

    def test_find_by_id_missing(self, fake_db):
        with pytest.raises(NotFound):
            UserRepository(fake_db).find_by_id("nope")

    def test_find_by_id_corrupt_notifications(self, fake_db):
        fake_db.cursor.fetchone.return_value = _user_row("{broken")
        with pytest.raises(CorruptData):
            UserRepository(fake_db).find_by_id("u1")

    def test_find_all_empty_is_success(self, fake_db):
        assert UserRepository(fake_db).find_all() == []

    def test_find_all_corrupt_row_is_surfaced(self, fake_db):
        fake_db.cursor.fetchall.return_value = [_user_row([]), _user_row({"x": 1})]
        with pytest.raises(CorruptData):
            UserRepository(fake_db).find_all()

    def test_find_by_credentials_uses_two_conditions(self, fake_db):
        fake_db.cursor.fetchone.return_value = _user_row(None)
        user = UserRepository(fake_db).find_by_credentials("alice", "hash")

        assert user.notification == []
        assert fake_db.last_sql.endswith("WHERE username = %s AND password = %s")
        assert fake_db.last_params == ("alice", "hash")

    def test_push_notification_is_single_append_statement(self, fake_db):
        UserRepository(fake_db).push_notification("u1", "hello")

        assert fake_db.cursor.execute.call_count == 1
        assert "jsonb_build_array(%s::text)" in fake_db.last_sql
        assert fake_db.last_sql.endswith("WHERE id = %s")
        assert fake_db.last_params == ("hello", "u1")

    def test_push_notification_to_missing_user(self, fake_db):
        fake_db.cursor.rowcount = 0
        with pytest.raises(NotFound):
            UserRepository(fake_db).push_notification("ghost", "hello")

    def test_broadcast_excludes_author(self, fake_db):
        fake_db.cursor.rowcount = 0
        notified = UserRepository(fake_db).broadcast_notification("u1", "New post: T")

        assert notified == 0
        assert fake_db.last_sql.endswith("WHERE id <> %s")
        assert fake_db.last_params == ("New post: T", "u1")

    def test_clear_notifications_writes_empty_list(self, fake_db):
        UserRepository(fake_db).clear_notifications("u1")

        assert fake_db.last_sql == "UPDATE users SET notification = %s WHERE id = %s"
        assert fake_db.last_params[0].adapted == []

    def test_clear_notifications_missing_user(self, fake_db):
        fake_db.cursor.rowcount = 0
        with pytest.raises(NotFound):
            UserRepository(fake_db).clear_notifications("ghost")

    def test_drain_notifications_reads_then_clears(self, fake_db):
        fake_db.cursor.fetchone.return_value = (["A", "B"],)
        assert UserRepository(fake_db).drain_notifications("u1") == ["A", "B"]

        first, second = fake_db.cursor.execute.call_args_list
        assert first[0][0].endswith("FOR UPDATE")
        assert second[0][0].startswith("UPDATE users SET notification")
        assert fake_db.commits == 1

    def test_drain_notifications_corrupt_does_not_clear(self, fake_db):
        fake_db.cursor.fetchone.return_value = ("not json",)
        with pytest.raises(CorruptData):
            UserRepository(fake_db).drain_notifications("u1")

        assert fake_db.cursor.execute.call_count == 1
        assert fake_db.rollbacks == 1

    def test_update_active_status_missing_user(self, fake_db):
        fake_db.cursor.rowcount = 0
        with pytest.raises(NotFound):
            UserRepository(fake_db).update_active_status("ghost", True)

    def test_delete_missing_user(self, fake_db):
        fake_db.cursor.rowcount = 0
        with pytest.raises(NotFound):
            UserRepository(fake_db).delete("ghost")

    def test_store_error_propagates_unchanged(self, fake_db):
        error = psycopg2.OperationalError("connection lost")
        fake_db.cursor.execute.side_effect = error
        with pytest.raises(psycopg2.OperationalError) as exc_info:
            UserRepository(fake_db).delete("u1")
        assert exc_info.value is error
        assert fake_db.rollbacks == 1


class TestPostRepository:

    def _post_row(self, title="T"):
        return ("p1", "U1", title, "food", "body", 0, NOW)

    def test_create(self, fake_db):
        post = Post(user_id="U1", title="T", content="body", type="food", id="p1", created_at=NOW)
        PostRepository(fake_db).create(post)

        assert fake_db.last_sql == (
            "INSERT INTO posts (post_id, user_id, title, type, content, likes, created_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s)"
        )
        assert fake_db.last_params == ("p1", "U1", "T", "food", "body", 0, NOW)

    def test_find_by_id(self, fake_db):
        fake_db.cursor.fetchone.return_value = self._post_row()
        post = PostRepository(fake_db).find_by_id("p1")
        assert post.title == "T"
        assert post.user_id == "U1"

    def test_find_by_id_missing_is_not_found_only(self, fake_db):
        with pytest.raises(NotFound) as exc_info:
            PostRepository(fake_db).find_by_id("p1")
        assert not isinstance(exc_info.value, NotFoundOrNotOwned)

    def test_find_by_type(self, fake_db):
        fake_db.cursor.fetchall.return_value = [self._post_row(), self._post_row("T2")]
        posts = PostRepository(fake_db).find_by_type("food")
        assert [p.title for p in posts] == ["T", "T2"]
        assert "WHERE type = %s" in fake_db.last_sql

    def test_update_owned_binds_fields_then_keys(self, fake_db):
        PostRepository(fake_db).update_owned("p1", "U1", "T2", "new body")

        assert fake_db.last_sql == (
            "UPDATE posts SET title = %s, content = %s WHERE post_id = %s AND user_id = %s"
        )
        assert fake_db.last_params == ("T2", "new body", "p1", "U1")

    def test_update_owned_zero_rows(self, fake_db):
        fake_db.cursor.rowcount = 0
        with pytest.raises(NotFoundOrNotOwned):
            PostRepository(fake_db).update_owned("p1", "U2", "T2", "x")

    def test_increment_likes_is_store_side(self, fake_db):
        PostRepository(fake_db).increment_likes("p1")

        assert fake_db.last_sql == "UPDATE posts SET likes = likes + 1 WHERE post_id = %s"
        assert fake_db.last_params == ("p1",)
        fake_db.cursor.fetchone.assert_not_called()

    def test_increment_likes_missing(self, fake_db):
        fake_db.cursor.rowcount = 0
        with pytest.raises(NotFound):
            PostRepository(fake_db).increment_likes("ghost")

    def test_delete_owned_zero_rows(self, fake_db):
        fake_db.cursor.rowcount = 0
        with pytest.raises(NotFoundOrNotOwned):
            PostRepository(fake_db).delete_owned("p1", "U2")
        assert fake_db.last_sql == "DELETE FROM posts WHERE post_id = %s AND user_id = %s"

    def test_delete_many_rows_is_success(self, fake_db):
        fake_db.cursor.rowcount = 3
        PostRepository(fake_db).delete("p1")


class TestQuestionRepository:

    def _question_row(self, replies):
        return ("q1", "p1", "U2", "Where to eat?", replies, NOW)

    def test_create_encodes_replies(self, fake_db):
        question = Question(post_id="p1", user_id="U2", text="Where to eat?", id="q1", created_at=NOW)
        QuestionRepository(fake_db).create(question)

        params = fake_db.last_params
        assert params[:4] == ("q1", "p1", "U2", "Where to eat?")
        assert params[4].adapted == []

    def test_find_by_post_decodes_each_row(self, fake_db):
        fake_db.cursor.fetchall.return_value = [self._question_row(["a", "b"]), self._question_row(None)]
        questions = QuestionRepository(fake_db).find_by_post("p1")
        assert [q.replies for q in questions] == [["a", "b"], []]

    def test_find_by_id_corrupt_replies(self, fake_db):
        fake_db.cursor.fetchone.return_value = self._question_row("[1, 2]")
        with pytest.raises(CorruptData):
            QuestionRepository(fake_db).find_by_id("q1")

    def test_find_on_user_posts_joins_posts(self, fake_db):
        QuestionRepository(fake_db).find_on_user_posts("U1")
        assert "FROM questions q JOIN posts p ON p.post_id = q.post_id WHERE p.user_id = %s" in fake_db.last_sql
        assert fake_db.last_params == ("U1",)

    def test_append_reply(self, fake_db):
        QuestionRepository(fake_db).append_reply("q1", "Try the market")
        assert fake_db.last_sql.startswith("UPDATE questions SET replies = COALESCE(replies")
        assert fake_db.last_params == ("Try the market", "q1")

    def test_append_reply_missing(self, fake_db):
        fake_db.cursor.rowcount = 0
        with pytest.raises(NotFound):
            QuestionRepository(fake_db).append_reply("ghost", "x")

    def test_delete_owned_zero_rows(self, fake_db):
        fake_db.cursor.rowcount = 0
        with pytest.raises(NotFoundOrNotOwned):
            QuestionRepository(fake_db).delete_owned("q1", "U3")

    def test_delete_by_post_zero_rows_is_success(self, fake_db):
        fake_db.cursor.rowcount = 0
        assert QuestionRepository(fake_db).delete_by_post("p1") == 0


class TestScenarios:

    def test_owner_scoped_post_lifecycle(self, fake_db):
        posts = PostRepository(fake_db)
        post = posts.create(Post(user_id="U1", title="T1", content="C", type="food", id="p1", created_at=NOW))

        fake_db.cursor.rowcount = 0
        with pytest.raises(NotFoundOrNotOwned):
            posts.update_owned(post.id, "U2", "T2", "C")
        assert fake_db.last_params == ("T2", "C", "p1", "U2")

        fake_db.cursor.rowcount = 1
        posts.update_owned(post.id, "U1", "T2", "C")
        fake_db.cursor.fetchone.return_value = ("p1", "U1", "T2", "food", "C", 0, NOW)
        assert posts.find_by_id(post.id).title == "T2"

        posts.delete_owned(post.id, "U1")
        assert fake_db.last_params == ("p1", "U1")
        fake_db.cursor.fetchone.return_value = None
        with pytest.raises(NotFound) as exc_info:
            posts.find_by_id(post.id)
        assert not isinstance(exc_info.value, NotFoundOrNotOwned)

    def test_notification_queue(self, fake_db):
        users = UserRepository(fake_db)
        users.push_notification("U1", "A")
        users.push_notification("U1", "B")
        pushed = [c[0][1][0] for c in fake_db.cursor.execute.call_args_list]
        assert pushed == ["A", "B"]

        fake_db.cursor.fetchone.return_value = _user_row(["A", "B"])
        assert users.find_by_id("U1").notification == ["A", "B"]

        users.clear_notifications("U1")
        fake_db.cursor.fetchone.return_value = _user_row([])
        assert users.find_by_id("U1").notification == []
