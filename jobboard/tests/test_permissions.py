import pytest

from jobboard.dependencies.permissions import Action, PERMISSIONS, can, is_admin
from jobboard.models.user import User, UserRole
from jobboard.schemas.common import Pagination
from jobboard.utils.errors import first_error_message


def user_with(role):
    return User(email=f"{role.value}@example.com", role=role)


def test_every_action_has_an_entry():
    assert set(PERMISSIONS) == set(Action)


@pytest.mark.parametrize(
    "role, allowed",
    [
        (UserRole.APPLICANT, {Action.MANAGE_RESUMES, Action.USE_AI, Action.APPLY_TO_JOBS}),
        (UserRole.EMPLOYER, {Action.MANAGE_JOBS, Action.REVIEW_APPLICATIONS}),
        (
            UserRole.ADMIN,
            {Action.MANAGE_RESUMES, Action.USE_AI, Action.MANAGE_JOBS, Action.REVIEW_APPLICATIONS, Action.MANAGE_SKILLS},
        ),
    ],
)
def test_role_permissions(role, allowed):
    user = user_with(role)
    assert {action for action in Action if can(user, action)} == allowed


def test_is_admin():
    assert is_admin(user_with(UserRole.ADMIN))
    assert not is_admin(user_with(UserRole.EMPLOYER))


def test_pagination_rounds_up():
    page = Pagination.build(page=2, limit=10, total=21)
    assert page.total_pages == 3
    assert Pagination.build(page=1, limit=10, total=0).total_pages == 0


def test_first_error_message():
    errors = [
        {"loc": ("body", "salary_min"), "msg": "Input should be greater than 0"},
        {"loc": ("body", "title"), "msg": "Field required"},
    ]
    assert first_error_message(errors) == "salary_min: Input should be greater than 0"
    assert first_error_message([{"loc": ("body",), "msg": "Value error, Bad range"}]) == "Bad range"
    assert first_error_message([]) == "Invalid request"
