"""Tests for the cached MongoDB client."""

import unittest
from unittest.mock import patch, MagicMock

from pymongo.errors import ServerSelectionTimeoutError

from adapter.mongodb import connection


class TestGetMongodbClient(unittest.TestCase):

    def setUp(self):
        connection.reset_client()

    def tearDown(self):
        connection.reset_client()

    @patch.object(connection, 'MONGO_URL', 'mongodb://localhost:27017')
    @patch('adapter.mongodb.connection.MongoClient')
    def test_failed_connection_is_retried_on_next_call(self, mock_client_cls):
        healthy = MagicMock()
        mock_client_cls.side_effect = [ServerSelectionTimeoutError('starting up'), healthy]

        self.assertIsNone(connection.get_mongodb_client())
        self.assertIs(connection.get_mongodb_client(), healthy)
        self.assertEqual(mock_client_cls.call_count, 2)

    @patch.object(connection, 'MONGO_URL', 'mongodb://localhost:27017')
    @patch('adapter.mongodb.connection.MongoClient')
    def test_outage_is_logged_once(self, mock_client_cls):
        mock_client_cls.side_effect = ServerSelectionTimeoutError('down')

        with self.assertLogs('adapter.mongodb.connection', level='ERROR') as logs:
            connection.get_mongodb_client()
            connection.get_mongodb_client()

        self.assertEqual(len(logs.records), 1)
        self.assertEqual(mock_client_cls.call_count, 2)

    @patch.object(connection, 'MONGO_URL', 'mongodb://localhost:27017')
    @patch('adapter.mongodb.connection.MongoClient')
    def test_healthy_client_is_cached(self, mock_client_cls):
        client = connection.get_mongodb_client()

        self.assertIs(connection.get_mongodb_client(), client)
        mock_client_cls.assert_called_once()

    @patch.object(connection, 'MONGO_URL', None)
    @patch('adapter.mongodb.connection.MongoClient')
    def test_missing_url_disables_store(self, mock_client_cls):
        self.assertIsNone(connection.get_mongodb_client())
        self.assertIsNone(connection.get_mongodb_client())
        mock_client_cls.assert_not_called()


if __name__ == '__main__':
    unittest.main()
