import unittest

from jenkins_control import BuildStatus
from jenkins_control import rss


class ExtractJobNameTest(unittest.TestCase):

    def test_simple(self):
        self.assertEqual(rss.extract_job_name('my-job #42 (stable)'), 'my-job')

    def test_hash_in_status(self):
        self.assertEqual(
            rss.extract_job_name('my job #42 (broken since build #40)'),
            'my job')

    def test_without_status(self):
        self.assertEqual(rss.extract_job_name('my-job #42'), 'my-job')

    def test_not_a_build_title(self):
        self.assertIsNone(rss.extract_job_name('All last builds only'))
        self.assertIsNone(rss.extract_job_name(None))


class ExtractBuildNumberTest(unittest.TestCase):

    def test_simple(self):
        self.assertEqual(rss.extract_build_number('my-job #42 (stable)'), '42')

    def test_hash_in_status(self):
        self.assertEqual(
            rss.extract_build_number('my-job #42 (broken since build #40)'),
            '42')

    def test_not_a_build_title(self):
        self.assertIsNone(rss.extract_build_number('my-job (stable)'))


class ExtractStatusTest(unittest.TestCase):

    def check(self, status_text, expected):
        self.assertEqual(
            rss.extract_status('my-job #42 (%s)' % status_text), expected,
            status_text)

    def test_success(self):
        self.check('stable', BuildStatus.SUCCESS)
        self.check('back to normal', BuildStatus.SUCCESS)
        self.check('fixed', BuildStatus.SUCCESS)

    def test_unstable(self):
        self.check('unstable', BuildStatus.UNSTABLE)
        self.check('1 test is still failing', BuildStatus.UNSTABLE)
        self.check('3 tests started to fail', BuildStatus.UNSTABLE)

    def test_failure(self):
        self.check('broken since this build', BuildStatus.FAILURE)
        self.check('broken since build #40', BuildStatus.FAILURE)
        self.check('broken for a long time', BuildStatus.FAILURE)

    def test_aborted(self):
        self.check('aborted', BuildStatus.ABORTED)

    def test_not_built(self):
        self.check('not built', BuildStatus.NOT_BUILT)

    def test_in_progress(self):
        self.check('?', BuildStatus.NULL)

    def test_unknown(self):
        self.check('whatever', BuildStatus.NULL)
        self.assertEqual(rss.extract_status('my-job #42'), BuildStatus.NULL)
        self.assertEqual(rss.extract_status(''), BuildStatus.NULL)
