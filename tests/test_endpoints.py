from urllib.parse import parse_qsl, urlparse

from jenkins_control import endpoints
from jenkins_control import InvalidTarget
from jenkins_control import JenkinsConfiguration
from jenkins_control import PlatformVariant
from jenkins_control import UnknownPlatformVariant
from tests.base import JenkinsTestBase

JOB_TREE = ('name,url,color,buildable,inQueue,'
            'healthReport%5Bdescription,iconUrl%5D,'
            'lastBuild%5Bid,url,building,result,number%5D,'
            'property%5BparameterDefinitions%5Bname,type,'
            'defaultParameterValue%5Bvalue%5D,choices%5D%5D')


class EndpointsTestBase(JenkinsTestBase):

    def setUp(self):
        super(EndpointsTestBase, self).setUp()
        self.job_url = self.make_url('job/my-job/')


class CreateWorkspaceUrlTest(EndpointsTestBase):

    def test_simple(self):
        self.assertEqual(
            endpoints.create_workspace_url(self.configuration),
            self.make_url('api/xml?tree=nodeName,nodeDescription,'
                          'primaryView%5Bname,url%5D,'
                          'views%5Bname,url,views%5Bname,url%5D%5D'))

    def test_trailing_slash(self):
        configuration = JenkinsConfiguration(self.make_url(''))
        self.assertEqual(
            endpoints.create_workspace_url(configuration),
            endpoints.create_workspace_url(self.configuration))

    def test_malformed_server_url(self):
        for server_url in ['not a url', 'ftp://example.com', 'http://',
                           'http://example.com:port/', None, '']:
            configuration = JenkinsConfiguration(server_url)
            with self.assertRaises(InvalidTarget):
                endpoints.create_workspace_url(configuration)


class CreateViewUrlTest(EndpointsTestBase):

    def test_classic(self):
        self.assertEqual(
            endpoints.create_view_url(PlatformVariant.CLASSIC,
                                      self.make_url('view/All/')),
            self.make_url('view/All/api/xml?tree=name,url,jobs%5B'
                          + JOB_TREE + '%5D'))

    def test_folder_based(self):
        self.assertEqual(
            endpoints.create_view_url(PlatformVariant.FOLDER_BASED,
                                      self.make_url('view/All/')),
            self.make_url('view/All/api/xml?tree=name,url,views%5Bjobs%5B'
                          + JOB_TREE + '%5D%5D'))

    def test_unknown_platform(self):
        with self.assertRaises(InvalidTarget):
            endpoints.create_view_url('cloudbees', self.make_url('view/All/'))

    def test_unknown_platform_error_type(self):
        with self.assertRaises(UnknownPlatformVariant) as context_manager:
            endpoints.create_view_url('cloudbees', self.make_url('view/All/'))
        self.assertEqual(context_manager.exception.variant, 'cloudbees')

    def test_view_name_with_space(self):
        self.assertEqual(
            endpoints.create_view_url(PlatformVariant.CLASSIC,
                                      self.make_url('view/My View')),
            self.make_url('view/My%20View/api/xml?tree=name,url,jobs%5B'
                          + JOB_TREE + '%5D'))


class CreateJobUrlTest(EndpointsTestBase):

    def test_simple(self):
        self.assertEqual(
            endpoints.create_job_url(self.job_url),
            self.make_url('job/my-job/api/xml?tree=' + JOB_TREE))

    def test_without_trailing_slash(self):
        self.assertEqual(
            endpoints.create_job_url(self.make_url('job/my-job')),
            self.make_url('job/my-job/api/xml?tree=' + JOB_TREE))

    def test_already_encoded(self):
        self.assertEqual(
            endpoints.create_job_url(self.make_url('job/my%20job/')),
            endpoints.create_job_url(self.make_url('job/my job/')))


class CreateRunJobUrlTest(EndpointsTestBase):

    def test_simple(self):
        self.assertEqual(
            endpoints.create_run_job_url(self.job_url, self.configuration),
            self.make_url('job/my-job/build?delay=0sec'))

    def test_with_delay(self):
        self.configuration.build_delay = 5
        self.assertEqual(
            endpoints.create_run_job_url(self.job_url, self.configuration),
            self.make_url('job/my-job/build?delay=5sec'))


class CreateRunParameterizedJobUrlTest(EndpointsTestBase):

    def test_simple(self):
        url = endpoints.create_run_parameterized_job_url(
            self.job_url, self.configuration,
            [('BRANCH', 'feature/x y'), ('A&B', 'c=d')])

        self.assertEqual(
            url,
            self.make_url('job/my-job/buildWithParameters?delay=0sec'
                          '&BRANCH=feature%2Fx%20y&A%26B=c%3Dd'))

    def test_parameters_decode_back(self):
        parameters = [('BRANCH', 'feature/x y'), ('A&B', 'c=d'),
                      ('QUERY', '?a=1&b=2#top'), ('NAME', u'caf\xe9')]
        url = endpoints.create_run_parameterized_job_url(
            self.job_url, self.configuration, parameters)

        decoded = parse_qsl(urlparse(url).query)
        self.assertEqual(decoded, [('delay', '0sec')] + parameters)

    def test_dict_parameters(self):
        url = endpoints.create_run_parameterized_job_url(
            self.job_url, self.configuration, {'ENV': 'prod'})
        self.assertEqual(
            url,
            self.make_url('job/my-job/buildWithParameters?delay=0sec&ENV=prod'))

    def test_repeated_parameter(self):
        url = endpoints.create_run_parameterized_job_url(
            self.job_url, self.configuration,
            [('TARGET', 'a'), ('TARGET', 'b')])
        self.assertEqual(
            url,
            self.make_url('job/my-job/buildWithParameters?delay=0sec'
                          '&TARGET=a&TARGET=b'))

    def test_no_parameters(self):
        url = endpoints.create_run_parameterized_job_url(
            self.job_url, self.configuration, {})
        self.assertEqual(
            url, self.make_url('job/my-job/buildWithParameters?delay=0sec'))

    def test_unencodable_value(self):
        with self.assertRaises(InvalidTarget):
            endpoints.create_run_parameterized_job_url(
                self.job_url, self.configuration, {'NAME': u'\ud800'})


class CreateRssLatestUrlTest(EndpointsTestBase):

    def test_simple(self):
        self.assertEqual(endpoints.create_rss_latest_url(self.base_url),
                         self.make_url('rssLatest'))

    def test_invalid_escape(self):
        with self.assertRaises(InvalidTarget) as context_manager:
            endpoints.create_rss_latest_url(self.make_url('job/a%zz/'))
        self.assertEqual(
            str(context_manager.exception),
            'URL has an invalid escape: %s' % self.make_url('job/a%zz/'))

    def test_valid_escape_kept(self):
        self.assertEqual(
            endpoints.create_rss_latest_url(self.make_url('job/a%20b/')),
            self.make_url('job/a%20b/rssLatest'))


class CreateAuthenticationUrlTest(EndpointsTestBase):

    def test_simple(self):
        self.assertEqual(endpoints.create_authentication_url(self.base_url),
                         self.make_url('api/xml?tree=nodeName'))

    def test_same_url_whatever_the_platform(self):
        for platform in PlatformVariant:
            self.manager.session.platform = platform
            url = endpoints.create_authentication_url(self.base_url)
            self.assertEqual(urlparse(url).query, 'tree=nodeName')


class TargetPortTest(JenkinsTestBase):

    def test_explicit_port(self):
        self.assertEqual(
            endpoints.target_port('http://example.com:8080/jenkins/'), 8080)

    def test_no_port(self):
        self.assertEqual(endpoints.target_port(self.make_url('')), None)
