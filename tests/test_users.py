from fastapi import status

from roombooker.models.user import User
from roombooker.utils.auth import create_access_token
from tests.helpers import booked_user_ids


# pylint: disable=redefined-outer-name,unused-argument


def test_get_users(client, auth_headers, test_users):
    response = client.get("/api/users", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [user["id"] for user in data] == ["u1", "u2", "u3"]
    assert data[0]["firstName"] == "First1"


def test_get_users_without_token(client, test_users):
    response = client.get("/api/users")
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_get_user_by_id(client, auth_headers, test_users):
    response = client.get("/api/users/u2", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == "u2"
    assert data["email"] == "u2@example.com"
    assert data["lastName"] == "Last2"


def test_get_user_not_found(client, auth_headers):
    response = client.get("/api/users/nobody", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"message": "User not found.", "statusCode": 404}


def test_get_user_bookings(client, auth_headers, test_booking):
    response = client.get("/api/users/u2/bookings", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [booking["id"] for booking in data] == [test_booking.id]
    assert data[0]["roomId"] == "room-1"

    response = client.get("/api/users/u3/bookings", headers=auth_headers)
    assert response.json() == []


def test_get_user_bookings_unknown_user(client, auth_headers):
    response = client.get("/api/users/nobody/bookings", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_get_session_user_bookings(client, test_booking):
    headers = {"Authorization": f"Bearer {create_access_token('u1')}"}
    response = client.get("/api/user/bookings", headers=headers)
    assert response.status_code == status.HTTP_200_OK
    assert [booking["id"] for booking in response.json()] == [test_booking.id]

    headers = {"Authorization": f"Bearer {create_access_token('u3')}"}
    response = client.get("/api/user/bookings", headers=headers)
    assert response.json() == []


def test_get_user_info(client, auth_headers, test_users):
    response = client.get("/api/user", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == "u1"
    assert response.json()["position"] == "Engineer"


def test_get_user_info_for_removed_user(client, auth_headers):
    response = client.get("/api/user", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_update_user(client, auth_headers, test_db, test_users):
    response = client.put(
        "/api/users/u2", json={"position": "Manager", "firstName": "Ann"}, headers=auth_headers
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"message": "User updated successfully."}
    test_db.expire_all()
    user = test_db.get(User, "u2")
    assert user.position == "Manager"
    assert user.first_name == "Ann"
    assert user.last_name == "Last2"


def test_update_user_not_found(client, auth_headers):
    response = client.put("/api/users/nobody", json={"position": "Manager"}, headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_update_user_empty_payload(client, auth_headers, test_users):
    response = client.put("/api/users/u1", json={}, headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_update_user_email_taken(client, auth_headers, test_users):
    response = client.put("/api/users/u1", json={"email": "u2@example.com"}, headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Email is already in use."


def test_delete_user_requires_admin(client, auth_headers, test_db, test_users):
    response = client.delete("/api/users/u2", headers=auth_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"message": "Require Admin Role!", "statusCode": 403}
    test_db.expire_all()
    assert test_db.get(User, "u2") is not None


def test_delete_user(client, admin_headers, test_db, test_booking):
    response = client.delete("/api/users/u2", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"message": "User deleted successfully."}
    test_db.expire_all()
    assert test_db.get(User, "u2") is None
    assert booked_user_ids(test_db, test_booking.id) == {"u1"}


def test_delete_user_not_found(client, admin_headers):
    response = client.delete("/api/users/nobody", headers=admin_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_create_user(client, admin_headers, test_db):
    payload = {"firstName": "Jo", "lastName": "Doe", "email": "jo@example.com", "position": "Designer"}
    response = client.post("/api/users", json=payload, headers=admin_headers)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["id"]
    assert data["email"] == "jo@example.com"
    assert test_db.get(User, data["id"]).first_name == "Jo"


def test_create_user_with_id(client, admin_headers):
    response = client.post("/api/users", json={"id": "u9", "email": "u9@example.com"}, headers=admin_headers)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["id"] == "u9"


def test_create_user_requires_admin(client, auth_headers):
    response = client.post("/api/users", json={"email": "jo@example.com"}, headers=auth_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_create_user_duplicate(client, admin_headers, test_users):
    response = client.post("/api/users", json={"email": "u1@example.com"}, headers=admin_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

    response = client.post("/api/users", json={"id": "u1"}, headers=admin_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
