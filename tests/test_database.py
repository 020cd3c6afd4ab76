# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import pytest
from unittest.mock import MagicMock

from app.db.database import atomic, get_db


def test_get_db_closes_session():
    """
    Tests that the database session is properly closed by the get_db dependency,
    even if an exception occurs.
    """
    mock_db_session = MagicMock()
    request = MagicMock()
    request.app.state.database.session.return_value = mock_db_session

    db_generator = get_db(request)

    db = next(db_generator)

    assert db is mock_db_session

    with pytest.raises(ValueError):
        db_generator.throw(ValueError("Simulated error during dependency usage"))

    # Assert that db.close() was called on the mock session
    mock_db_session.close.assert_called_once()


def test_atomic_commits_on_success():
    mock_db_session = MagicMock()

    with atomic(mock_db_session):
        pass

    mock_db_session.commit.assert_called_once()
    mock_db_session.rollback.assert_not_called()


def test_atomic_rolls_back_and_reraises():
    mock_db_session = MagicMock()

    with pytest.raises(RuntimeError):
        with atomic(mock_db_session):
            raise RuntimeError("storage failure")

    mock_db_session.rollback.assert_called_once()
    mock_db_session.commit.assert_not_called()
