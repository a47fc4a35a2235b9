"""Tests for the health and root endpoints."""

import unittest
from unittest.mock import patch, MagicMock

from fastapi.testclient import TestClient

from api.main import app, SERVICE_NAME, VERSION


class TestHealth(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    @patch('api.routes.health.get_mongodb_client')
    def test_healthy_when_mongodb_pings(self, mock_get_client):
        mock_get_client.return_value = MagicMock()

        response = self.client.get('/health')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'healthy')
        self.assertEqual(response.json()['services']['mongodb']['status'], 'healthy')

    @patch('api.routes.health.get_mongodb_client')
    def test_degraded_when_not_configured(self, mock_get_client):
        mock_get_client.return_value = None

        response = self.client.get('/health')

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()['status'], 'degraded')

    @patch('api.routes.health.get_mongodb_client')
    def test_does_not_ping_again(self, mock_get_client):
        client = MagicMock()
        mock_get_client.return_value = client

        self.client.get('/health')

        mock_get_client.assert_called_once()
        client.admin.command.assert_not_called()

    def test_root_reports_service_and_version(self):
        response = self.client.get('/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['service'], SERVICE_NAME)
        self.assertEqual(response.json()['version'], VERSION)


if __name__ == '__main__':
    unittest.main()
