"""
Short identifier generators.

IDs are client-generated from a 62-character URL-safe alphabet. Shorter IDs
collide more often, which is why creation goes through
``create_with_unique_id``.
"""

import secrets

ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

PROJECT_ID_LENGTH = 8
TEAM_ID_LENGTH = 6
USER_ID_LENGTH = 6
TEST_RUN_ID_LENGTH = 4
TEST_RESULT_ID_LENGTH = 4
TEST_CASE_ID_LENGTH = 3


def generate_id(length: int) -> str:
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


def generate_project_id() -> str:
    return generate_id(PROJECT_ID_LENGTH)


def generate_team_id() -> str:
    return generate_id(TEAM_ID_LENGTH)


def generate_user_id() -> str:
    return generate_id(USER_ID_LENGTH)


def generate_test_run_id() -> str:
    return generate_id(TEST_RUN_ID_LENGTH)


def generate_test_case_id() -> str:
    return generate_id(TEST_CASE_ID_LENGTH)


def generate_test_result_id() -> str:
    return generate_id(TEST_RESULT_ID_LENGTH)


def is_well_formed_id(value) -> bool:
    return (
        isinstance(value, str)
        and 0 < len(value) <= 64
        and all(ch in ALPHABET for ch in value)
    )
