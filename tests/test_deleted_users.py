"""Deleted users API tests."""

from src.models.user import User


def test_list_deleted_users(client, auth_headers, make_user):
    """Test listing only trashed users."""
    make_user("active@example.com")
    gone = make_user("gone@example.com", trashed=True)

    response = client.get("/api/v1/users/deleted", headers=auth_headers)

    assert response.status_code == 200
    rows = response.json()
    assert [row["id"] for row in rows] == [gone.id]
    assert rows[0]["deleted_at"] is not None


def test_list_deleted_users_requires_permission(client, member_headers):
    """Test that a user without delete/restore permissions is refused."""
    response = client.get("/api/v1/users/deleted", headers=member_headers)

    assert response.status_code == 403
    error = response.json()["error"]
    assert error["code"] == "UnauthorizedError"
    assert "restore-users" in error["details"]["required"]


def test_list_deleted_users_requires_authentication(client):
    """Test that anonymous requests are refused."""
    response = client.get("/api/v1/users/deleted")
    assert response.status_code in (401, 403)


def test_restore_user(client, auth_headers, make_user, db):
    """Test restoring a trashed user."""
    gone = make_user("gone@example.com", trashed=True)

    response = client.patch(f"/api/v1/users/deleted/{gone.id}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "message": "The user was successfully restored.",
        "redirect_to": "/api/v1/users",
    }
    db.expire_all()
    assert db.query(User).filter(User.id == gone.id).one().deleted_at is None


def test_restore_user_with_put(client, auth_headers, make_user):
    """Test that PUT is accepted for restore as well as PATCH."""
    gone = make_user("gone@example.com", trashed=True)

    response = client.put(f"/api/v1/users/deleted/{gone.id}", headers=auth_headers)

    assert response.status_code == 200


def test_restore_active_user_conflicts(client, auth_headers, make_user):
    """Test restoring a user that is not trashed."""
    user = make_user("active@example.com")

    response = client.patch(f"/api/v1/users/deleted/{user.id}", headers=auth_headers)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "UserNotTrashedError"


def test_restore_missing_user(client, auth_headers):
    """Test restoring a user that does not exist."""
    response = client.patch("/api/v1/users/deleted/9999", headers=auth_headers)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "UserNotFoundError"


def test_restore_requires_restore_permission(client, member_headers, make_user):
    """Test restoring without the restore-users permission."""
    gone = make_user("gone@example.com", trashed=True)

    response = client.patch(f"/api/v1/users/deleted/{gone.id}", headers=member_headers)

    assert response.status_code == 403


def test_restore_with_only_restore_permission(client, make_user, restorer_role, login_as):
    """Test that the restore-users permission alone is enough."""
    make_user("restorer@example.com", extra_roles=[restorer_role])
    headers = login_as("restorer@example.com")
    gone = make_user("gone@example.com", trashed=True)

    response = client.patch(f"/api/v1/users/deleted/{gone.id}", headers=headers)

    assert response.status_code == 200


def test_permanent_delete_disabled_returns_404(client, auth_headers, make_user, db):
    """Test that the endpoint is hidden when the feature flag is off."""
    gone = make_user("gone@example.com", trashed=True)
    active = make_user("active@example.com")

    for user_id in (gone.id, active.id):
        response = client.delete(f"/api/v1/users/deleted/{user_id}", headers=auth_headers)
        assert response.status_code == 404

    assert db.query(User).filter(User.id == gone.id).count() == 1


def test_permanent_delete(client, auth_headers, make_user, db, permanently_delete_enabled):
    """Test permanently deleting a trashed user."""
    gone = make_user("gone@example.com", trashed=True)
    gone_id = gone.id

    response = client.delete(f"/api/v1/users/deleted/{gone_id}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "message": "The user was permanently deleted.",
        "redirect_to": "/api/v1/users/deleted",
    }
    assert db.query(User).filter(User.id == gone_id).count() == 0


def test_permanent_delete_requires_trashed_user(
    client, auth_headers, make_user, db, permanently_delete_enabled
):
    """Test permanently deleting a user that was never soft-deleted."""
    user = make_user("active@example.com")

    response = client.delete(f"/api/v1/users/deleted/{user.id}", headers=auth_headers)

    assert response.status_code == 409
    assert "must be deleted first" in response.json()["error"]["message"]
    assert db.query(User).filter(User.id == user.id).count() == 1


def test_permanent_delete_requires_permission(
    client, member_headers, make_user, permanently_delete_enabled
):
    """Test permanently deleting without the restore-users permission."""
    gone = make_user("gone@example.com", trashed=True)

    response = client.delete(f"/api/v1/users/deleted/{gone.id}", headers=member_headers)

    assert response.status_code == 403
