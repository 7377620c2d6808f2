import pytest
import pandas as pd
from unittest.mock import MagicMock, patch

from code_modules.oracle_adb_handler import OracleADBClient


@pytest.fixture
def mock_config():
    """Mock ADWConfig object"""
    config = MagicMock()
    config.username = "user"
    config.password = "password"
    config.dsn = "dsn"
    config.config_dir = "/config"
    config.wallet_loc = "/wallet"
    config.wallet_pw = "wallet_pw"
    return config


@patch("code_modules.oracle_adb_handler.oracledb.connect")
def test_connection_uses_wallet_settings(mock_connect, mock_config):
    with patch("code_modules.oracle_adb_handler.pd.read_sql", return_value=pd.DataFrame()):
        OracleADBClient(mock_config).execute_query_df("SELECT 1 FROM DUAL")

    mock_connect.assert_called_once_with(
        user="user",
        password="password",
        dsn="dsn",
        config_dir="/config",
        wallet_location="/wallet",
        wallet_password="wallet_pw",
    )


@patch("code_modules.oracle_adb_handler.oracledb.connect")
def test_execute_query_df_success(mock_connect, mock_config):
    """Test successful SELECT query returning DataFrame"""
    mock_conn = MagicMock()
    mock_connect.return_value = mock_conn

    expected_df = pd.DataFrame({"ID": [1, 2]})

    with patch("code_modules.oracle_adb_handler.pd.read_sql", return_value=expected_df) as read_sql:
        client = OracleADBClient(mock_config)
        result = client.execute_query_df("SELECT * FROM USERS WHERE ID = :user_id", {"user_id": 1})

    assert result.equals(expected_df)
    read_sql.assert_called_once_with(
        "SELECT * FROM USERS WHERE ID = :user_id", mock_conn, params={"user_id": 1}
    )
    mock_conn.close.assert_called_once()


@patch("code_modules.oracle_adb_handler.oracledb.connect")
def test_execute_query_df_failure(mock_connect, mock_config):
    """Test SELECT query failure raises exception and closes connection"""
    mock_conn = MagicMock()
    mock_connect.return_value = mock_conn

    with patch(
        "code_modules.oracle_adb_handler.pd.read_sql",
        side_effect=Exception("DB error"),
    ):
        client = OracleADBClient(mock_config)
        with pytest.raises(Exception):
            client.execute_query_df("SELECT * FROM USERS")

    mock_conn.close.assert_called_once()


@patch("code_modules.oracle_adb_handler.oracledb.connect")
def test_execute_single_non_query_success(mock_connect, mock_config):
    """Test execute single non-query commits successfully"""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__.return_value = mock_cursor
    mock_connect.return_value = mock_conn

    client = OracleADBClient(mock_config)
    client.execute_single_non_query(
        "DELETE FROM SESSIONS WHERE SESSION_ID = :session_id",
        params={"session_id": "abc"},
    )

    mock_cursor.execute.assert_called_once_with(
        "DELETE FROM SESSIONS WHERE SESSION_ID = :session_id", {"session_id": "abc"}
    )
    mock_conn.commit.assert_called_once()
    mock_conn.close.assert_called_once()


@patch("code_modules.oracle_adb_handler.oracledb.connect")
def test_execute_single_non_query_without_params(mock_connect, mock_config):
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__.return_value = mock_cursor
    mock_connect.return_value = mock_conn

    OracleADBClient(mock_config).execute_single_non_query("DELETE FROM SESSIONS")

    mock_cursor.execute.assert_called_once_with("DELETE FROM SESSIONS")


@patch("code_modules.oracle_adb_handler.oracledb.connect")
def test_execute_single_non_query_failure(mock_connect, mock_config):
    """Test rollback on execute failure"""
    mock_cursor = MagicMock()
    mock_cursor.execute.side_effect = Exception("Update failed")

    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__.return_value = mock_cursor
    mock_connect.return_value = mock_conn

    client = OracleADBClient(mock_config)
    with pytest.raises(Exception):
        client.execute_single_non_query("UPDATE USERS SET NAME = 'x'")

    mock_conn.rollback.assert_called_once()
    mock_conn.close.assert_called_once()
