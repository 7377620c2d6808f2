"""
This is Oracle adb handler module, All code interacting with
Oracle Autonoumous Database Warehourse goes through it.

The credential and session stores use it to persist users and sessions
when an ``[ADW]`` section is configured.
"""
import logging
from typing import Any, Mapping, Optional, Sequence, Union

import pandas as pd
import oracledb

from config_loader import ADWConfig

logger = logging.getLogger(__name__)

BindParams = Optional[Union[Sequence[Any], Mapping[str, Any]]]


class OracleADBClient:
    """
    Client for interacting with Oracle Autonomous Database (ADB).

    Responsibilities:
    - Execute SELECT queries and return results as pandas DataFrames
    - Execute DML statements with no returned output

    A connection is opened per call and always closed afterwards.
    """

    def __init__(self, config: ADWConfig):
        self._config = config

    def _get_connection(self):
        return oracledb.connect(
            user=self._config.username,
            password=self._config.password,
            dsn=self._config.dsn,
            config_dir=self._config.config_dir,
            wallet_location=self._config.wallet_loc,
            wallet_password=self._config.wallet_pw,
        )

    def execute_query_df(self, query: str, params: BindParams = None) -> pd.DataFrame:
        """
        Execute a SELECT query and return results as a pandas DataFrame.

        Args:
            query (str): SQL SELECT query
            params: Query bind parameters

        Returns:
            pd.DataFrame: Query result
        """
        conn = self._get_connection()
        try:
            df = pd.read_sql(query, conn, params=params)
            logger.debug("Query executed successfully, rows fetched: %d", len(df))
            return df
        except Exception:
            logger.error("Failed to execute SELECT query")
            raise
        finally:
            conn.close()

    def execute_single_non_query(self, query: str, params: BindParams = None) -> None:
        """
        Execute a non-SELECT query (INSERT, UPDATE, DELETE).

        Args:
            query (str): SQL statement
            params: Query bind parameters
        """
        conn = self._get_connection()
        try:
            with conn.cursor() as cursor:
                if params:
                    cursor.execute(query, params)
                else:
                    cursor.execute(query)

            conn.commit()
            logger.debug("Statement committed successfully")
        except Exception:
            conn.rollback()
            logger.error("Failed to execute non-SELECT query")
            raise
        finally:
            conn.close()
