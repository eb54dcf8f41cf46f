from unittest import mock

from django.db import OperationalError
from django.test import SimpleTestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient


class HealthViewTest(SimpleTestCase):
    """Test cases for the readiness endpoint"""

    def setUp(self):
        self.client = APIClient()
        self.url = reverse('bootstrap:health')
        patcher = mock.patch('bootstrap.views.connections')
        self.connections = patcher.start()
        self.addCleanup(patcher.stop)
        self.cursor = self.connections.__getitem__.return_value.cursor.return_value.__enter__.return_value

    def test_url(self):
        self.assertEqual(self.url, '/health/')

    def test_database_reachable(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json(), {'status': 'ok'})
        self.connections.__getitem__.assert_called_with('default')
        self.cursor.execute.assert_called_once_with("SELECT 1")

    def test_database_unavailable(self):
        self.cursor.execute.side_effect = OperationalError('could not connect to server')

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.json()['status'], 'unavailable')
        self.assertIn('could not connect', response.json()['detail'])

    def test_only_get_is_allowed(self):
        response = self.client.post(self.url)
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
