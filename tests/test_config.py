import unittest

from jenkins_control import ConfigurationError
from jenkins_control import FavoriteJob
from jenkins_control import JenkinsConfiguration


class JenkinsConfigurationTest(unittest.TestCase):

    def test_defaults(self):
        configuration = JenkinsConfiguration()
        self.assertFalse(configuration.is_server_url_set())
        self.assertEqual(configuration.build_delay, 0)
        self.assertEqual(configuration.favorite_jobs, [])

    def test_build_delay(self):
        configuration = JenkinsConfiguration('http://myjenkins', '10')
        self.assertEqual(configuration.build_delay, 10)
        self.assertTrue(configuration.is_server_url_set())

    def test_negative_build_delay(self):
        with self.assertRaises(ConfigurationError) as context_manager:
            JenkinsConfiguration('http://myjenkins', -1)
        self.assertEqual(str(context_manager.exception),
                         'Build delay must be >= 0 not -1')

    def test_invalid_build_delay(self):
        with self.assertRaises(ConfigurationError):
            JenkinsConfiguration('http://myjenkins', 'soon')

    def test_from_env(self):
        configuration = JenkinsConfiguration.from_env(
            {'JENKINS_URL': 'http://myjenkins:8080', 'JENKINS_BUILD_DELAY': '3'})
        self.assertEqual(configuration.server_url, 'http://myjenkins:8080')
        self.assertEqual(configuration.build_delay, 3)

    def test_favorites(self):
        configuration = JenkinsConfiguration('http://myjenkins')
        configuration.add_favorite('a', 'http://myjenkins/job/a/')
        configuration.add_favorite('b', 'http://myjenkins/job/b/')
        configuration.add_favorite('a', 'http://myjenkins/job/a/')

        self.assertEqual(configuration.favorite_jobs, [
            FavoriteJob('a', 'http://myjenkins/job/a/'),
            FavoriteJob('b', 'http://myjenkins/job/b/'),
        ])
        self.assertTrue(configuration.is_favorite('b'))

        configuration.remove_favorite('a')
        self.assertFalse(configuration.is_favorite('a'))
        self.assertEqual(len(configuration.favorite_jobs), 1)
