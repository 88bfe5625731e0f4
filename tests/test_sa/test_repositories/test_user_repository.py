# tests/test_sa/test_repositories/test_user_repository.py

import pytest
from core.sa.models import User

def test_create_user_hashes_password(user_repo):
    """Test creating a new user stores a salted hash, not the password."""
    user = user_repo.create_user(username="jdoe", password="secret", name="John Doe")
    assert user.id is not None
    assert user.role == "student"
    assert user.password_hash != "secret"
    assert user.password_hash.startswith("pbkdf2:sha256")

def test_same_password_gets_different_hashes(user_repo):
    first = user_repo.create_user(username="a", password="secret", name="A")
    second = user_repo.create_user(username="b", password="secret", name="B")
    assert first.password_hash != second.password_hash

def test_create_duplicate_username(user_repo, sample_student):
    """Test that creating a user with a duplicate username raises an error."""
    with pytest.raises(ValueError, match="User with username 'student1' already exists"):
        user_repo.create_user(username="student1", password="x", name="Someone Else")

def test_create_user_unknown_role(user_repo):
    with pytest.raises(ValueError, match="Unknown role 'librarian'"):
        user_repo.create_user(username="lib", password="x", name="Lib", role="librarian")

def test_get_by_id(user_repo, sample_student):
    fetched = user_repo.get_by_id(sample_student.id)
    assert fetched is not None
    assert fetched.username == "student1"

def test_get_by_nonexistent_id(user_repo):
    assert user_repo.get_by_id(999) is None

def test_find_by_credentials(user_repo, sample_student):
    user = user_repo.find_by_credentials("student1", "student-pass")
    assert user is not None
    assert user.id == sample_student.id

def test_find_by_credentials_wrong_password(user_repo, sample_student):
    assert user_repo.find_by_credentials("student1", "wrong") is None

def test_find_by_credentials_unknown_user(user_repo, sample_student):
    assert user_repo.find_by_credentials("nobody", "student-pass") is None

def test_find_by_credentials_empty_values(user_repo, sample_student):
    assert user_repo.find_by_credentials("", "") is None
    assert user_repo.find_by_credentials("student1", "") is None

def test_list_by_role(user_repo, sample_student, sample_admin):
    user_repo.create_user(username="student2", password="x", name="Second Student")

    students = user_repo.list_by_role("student")
    assert [u.username for u in students] == ["student1", "student2"]
    assert all(isinstance(u, User) for u in students)

    admins = user_repo.list_by_role("admin")
    assert [u.username for u in admins] == ["admin"]
    assert admins[0].is_admin
