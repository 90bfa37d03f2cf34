#!/usr/bin/env python
# Software License Agreement (BSD License)
#
# Copyright (c) 2010, Willow Garage, Inc.
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions
# are met:
#
#  * Redistributions of source code must retain the above copyright
#    notice, this list of conditions and the following disclaimer.
#  * Redistributions in binary form must reproduce the above
#    copyright notice, this list of conditions and the following
#    disclaimer in the documentation and/or other materials provided
#    with the distribution.
#  * Neither the name of Willow Garage, Inc. nor the names of its
#    contributors may be used to endorse or promote products derived
#    from this software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
# 'AS IS' AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
# LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS
# FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE
# COPYRIGHT OWNER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING,
# BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES;
# LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT
# LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN
# ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.
#

'''
.. module:: jenkins_control
    :platform: Unix, Windows
    :synopsis: Data access layer polling Jenkins for views, jobs and builds
    :noindex:

The :class:`JenkinsRequestManager` loads the workspace (views), the jobs of
a view, single jobs and the latest builds feed, and triggers builds.
'''

import logging

from jenkins_control import endpoints
from jenkins_control import parser
from jenkins_control import variants
from jenkins_control.config import FavoriteJob  # noqa: F401
from jenkins_control.config import JenkinsConfiguration  # noqa: F401
from jenkins_control.exceptions import ConfigurationError
from jenkins_control.exceptions import EmptyResponseException  # noqa: F401
from jenkins_control.exceptions import InvalidResponse  # noqa: F401
from jenkins_control.exceptions import InvalidTarget  # noqa: F401
from jenkins_control.exceptions import JenkinsException  # noqa: F401
from jenkins_control.exceptions import NotFoundException  # noqa: F401
from jenkins_control.exceptions import TimeoutException  # noqa: F401
from jenkins_control.exceptions import TransportFailure  # noqa: F401
from jenkins_control.exceptions import UnexpectedServerResponse  # noqa: F401
from jenkins_control.exceptions import UnknownPlatformVariant  # noqa: F401
from jenkins_control.model import Build, BuildStatus, Job, View, Workspace  # noqa: F401
from jenkins_control.security import SecurityClient, SecurityMode
from jenkins_control.security import create_security_client
from jenkins_control.variants import PlatformVariant

# Set default logging handler to avoid "No handler found" warnings.
logging.getLogger(__name__).addHandler(logging.NullHandler())

logger = logging.getLogger(__name__)


class JenkinsSession(object):
    '''Connection state shared by every request of a manager.

    Only :meth:`JenkinsRequestManager.authenticate` replaces it. It is not
    locked: callers running requests from several threads must serialize
    ``authenticate`` with the other operations.
    '''

    def __init__(self, security_client, platform=PlatformVariant.CLASSIC):
        self.security_client = security_client
        self.platform = platform


class JenkinsRequestManager(object):

    def __init__(self, security_client=None):
        '''Create a request manager.

        All methods will raise :class:`JenkinsException` subclasses on
        failure.

        :param security_client: transport used until :meth:`authenticate`
            is called, anonymous :class:`SecurityClient` by default
        '''
        if security_client is None:
            security_client = SecurityClient()
        self.session = JenkinsSession(security_client)

    @property
    def platform(self):
        return self.session.platform

    def _execute(self, url, method='GET'):
        return self.session.security_client.execute(url, method)

    def load_workspace(self, configuration):
        '''Load the server description, primary view and views.

        The primary view URL reported by Jenkins must use the same port as
        the configured server URL, otherwise Jenkins' own URL setting is
        wrong and later requests would go to the wrong place.

        :param configuration: :class:`JenkinsConfiguration`
        :returns: :class:`~jenkins_control.model.Workspace`
        :throws: :class:`ConfigurationError` on a port mismatch
        '''
        url = endpoints.create_workspace_url(configuration)
        root = parser.parse_document(self._execute(url))

        workspace = parser.create_workspace(root, configuration.server_url)
        if workspace.primary_view is None:
            raise ConfigurationError(
                'Jenkins did not report a primary view. Please check the '
                'server URL: %s' % configuration.server_url)

        jenkins_port = endpoints.target_port(url)
        view_url = endpoints.create_view_url(self.session.platform,
                                             workspace.primary_view.url)
        view_port = endpoints.target_port(view_url)
        if jenkins_port is not None and jenkins_port != view_port:
            raise ConfigurationError(
                "Jenkins Port seems to be incorrect in the Server "
                "configuration page. Please fix 'Jenkins URL' at "
                "%s/configure" % configuration.server_url.rstrip('/'))
        return workspace

    def load_latest_builds(self, configuration):
        '''Load the last build of each job from the ``rssLatest`` feed.

        :param configuration: :class:`JenkinsConfiguration`
        :returns: ordered ``{job name: Build}``
        '''
        url = endpoints.create_rss_latest_url(configuration.server_url)
        root = parser.parse_document(self._execute(url))
        return parser.create_latest_builds(root)

    def load_view(self, view_url):
        '''Load the jobs of a view.

        :param view_url: URL of the view, ``str``
        :returns: list of :class:`~jenkins_control.model.Job`
        '''
        url = endpoints.create_view_url(self.session.platform, view_url)
        root = parser.parse_document(self._execute(url))
        return variants.list_jobs(self.session.platform, root)

    def load_job(self, job_url):
        '''Load a single job.

        :param job_url: URL of the job, ``str``
        :returns: :class:`~jenkins_control.model.Job`
        '''
        url = endpoints.create_job_url(job_url)
        root = parser.parse_document(self._execute(url))
        return parser.create_job(root)

    def load_favorite_jobs(self, favorite_jobs):
        '''Load favorite jobs in order.

        The first job that cannot be loaded aborts the whole batch.

        :param favorite_jobs: ``[FavoriteJob]`` or job URLs
        :returns: list of :class:`~jenkins_control.model.Job`
        '''
        jobs = []
        for favorite in favorite_jobs:
            jobs.append(self.load_job(getattr(favorite, 'url', favorite)))
        return jobs

    def run_build(self, job, configuration):
        '''Trigger a build of ``job``.

        Jenkins queues the build asynchronously; nothing waits for it.
        '''
        url = endpoints.create_run_job_url(job.url, configuration)
        self._execute(url, 'POST')

    def run_parameterized_build(self, job, configuration, parameters):
        '''Trigger a build of ``job`` with parameters.

        :param job: :class:`~jenkins_control.model.Job`
        :param configuration: :class:`JenkinsConfiguration`
        :param parameters: ``dict`` or ``list of two membered tuples``
        '''
        url = endpoints.create_run_parameterized_job_url(
            job.url, configuration, parameters)
        self._execute(url, 'POST')

    def authenticate(self, server_url, security_mode=SecurityMode.NONE,
                     username=None, password=None, crumb_data=None):
        '''Connect with new credentials and detect the platform variant.

        The new session replaces the previous one only once the server
        answered.

        :param server_url: URL of Jenkins server, ``str``
        :param security_mode: :class:`SecurityMode`
        :param username: Server username, ``str``
        :param password: Server password or API token, ``str``
        :param crumb_data: CSRF crumb, ``str``
        :returns: detected :class:`PlatformVariant`
        '''
        security_client = create_security_client(
            server_url, security_mode, username, password, crumb_data)
        data = security_client.connect(
            endpoints.create_authentication_url(server_url))
        platform = variants.detect_variant(data)
        self.session = JenkinsSession(security_client, platform)
        logger.debug('Authenticated on %s (%s)', server_url, platform.value)
        return platform
