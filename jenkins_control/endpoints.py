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
.. module:: jenkins_control.endpoints
    :platform: Unix, Windows
    :synopsis: Request URLs for the Jenkins remote XML API
'''

import re
from urllib.parse import quote, urlencode, urljoin, urlparse, urlunparse

from jenkins_control.exceptions import InvalidTarget
from jenkins_control.exceptions import UnknownPlatformVariant
from jenkins_control.variants import PlatformVariant

# REST Endpoints
API_XML = 'api/xml'
BUILD = 'build'
PARAMETERIZED_BUILD = 'buildWithParameters'
RSS_LATEST = 'rssLatest'
CRUMB_URL = 'crumbIssuer/api/json'
TREE_PARAM = 'tree'
DELAY_PARAM = 'delay'

BASIC_JENKINS_INFO = ('nodeName,nodeDescription,primaryView[name,url],'
                      'views[name,url,views[name,url]]')
BASIC_JOB_INFO = ('name,url,color,buildable,inQueue,'
                  'healthReport[description,iconUrl],'
                  'lastBuild[id,url,building,result,number],'
                  'property[parameterDefinitions[name,type,'
                  'defaultParameterValue[value],choices]]')
BASIC_VIEW_INFO = 'name,url,jobs[%s]' % BASIC_JOB_INFO
FOLDER_VIEW_INFO = 'name,url,views[jobs[%s]]' % BASIC_JOB_INFO
TEST_CONNECTION_INFO = 'nodeName'

VIEW_INFO = {
    PlatformVariant.CLASSIC: BASIC_VIEW_INFO,
    PlatformVariant.FOLDER_BASED: FOLDER_VIEW_INFO,
}

# Characters left alone when re-quoting a path that may already be encoded
_PATH_SAFE = "/%:@!$&'()*+,;=~"

# A "%" that does not start a %XX escape
_INVALID_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _encode(value, safe=''):
    try:
        return quote(value, safe=safe)
    except (TypeError, UnicodeEncodeError) as e:
        raise InvalidTarget('Error during URL creation: %s' % e)


def _base_url(url):
    '''Validate an absolute server/job/view address and normalize it.

    The path is re-quoted (existing escapes are kept) and always ends
    with ``/`` so that relative endpoints can be joined to it.
    '''
    if not isinstance(url, str) or not url.strip():
        raise InvalidTarget('URL is malformed: %r' % (url,))
    parsed = urlparse(url.strip())
    if parsed.scheme not in ('http', 'https') or not parsed.hostname:
        raise InvalidTarget('URL is malformed: %s' % url)
    try:
        parsed.port
    except ValueError:
        raise InvalidTarget('URL is malformed: %s' % url)
    if _INVALID_ESCAPE.search(parsed.path):
        raise InvalidTarget('URL has an invalid escape: %s' % url)

    path = _encode(parsed.path, safe=_PATH_SAFE)
    if not path.endswith('/'):
        path += '/'
    return urlunparse((parsed.scheme, parsed.netloc, path, '', '', ''))


def _tree_query(fields):
    return '%s=%s' % (TREE_PARAM, _encode(fields, safe=','))


def _delay_query(configuration):
    return '%s=%dsec' % (DELAY_PARAM, configuration.build_delay)


def _build_url(base, path, query=None):
    url = urljoin(_base_url(base), path)
    if query:
        url += '?' + query
    return url


def target_port(url):
    '''Return the explicit port of ``url``, or None when it has none.'''
    try:
        return urlparse(url).port
    except ValueError:
        raise InvalidTarget('URL is malformed: %s' % url)


def create_workspace_url(configuration):
    '''URL loading the server description, primary view and views.

    :param configuration: :class:`~jenkins_control.config.JenkinsConfiguration`
    :returns: ``str``
    '''
    return _build_url(configuration.server_url, API_XML,
                      _tree_query(BASIC_JENKINS_INFO))


def create_view_url(platform, view_url):
    '''URL loading the jobs of a view.

    Folder-based servers need one extra level of ``views`` in the field
    selector.

    :param platform: :class:`~jenkins_control.variants.PlatformVariant`
    :param view_url: address of the view, ``str``
    :returns: ``str``
    '''
    try:
        fields = VIEW_INFO[platform]
    except KeyError:
        raise UnknownPlatformVariant(platform)
    return _build_url(view_url, API_XML, _tree_query(fields))


def create_job_url(job_url):
    '''URL loading a single job.'''
    return _build_url(job_url, API_XML, _tree_query(BASIC_JOB_INFO))


def create_run_job_url(job_url, configuration):
    '''URL triggering a build of a job after the configured delay.'''
    return _build_url(job_url, BUILD, _delay_query(configuration))


def create_run_parameterized_job_url(job_url, configuration, parameters):
    '''URL triggering a parameterized build.

    Each parameter name and value is percent-encoded on its own before
    being joined, so separators inside values stay escaped.

    Use a ``list of two membered tuples`` to repeat a parameter name
    (multi select parameters).

    :param job_url: address of the job, ``str``
    :param configuration: :class:`~jenkins_control.config.JenkinsConfiguration`
    :param parameters: ``dict`` or ``list of two membered tuples``
    :returns: ``str``
    '''
    if isinstance(parameters, dict):
        parameters = list(parameters.items())
    elif parameters is None:
        parameters = []
    query = _delay_query(configuration)
    if parameters:
        try:
            query += '&' + urlencode(parameters, quote_via=quote)
        except (TypeError, ValueError, UnicodeEncodeError) as e:
            raise InvalidTarget('Error during URL creation: %s' % e)
    return _build_url(job_url, PARAMETERIZED_BUILD, query)


def create_rss_latest_url(server_url):
    return _build_url(server_url, RSS_LATEST)


def create_authentication_url(server_url):
    '''URL used to check the connection and sniff the platform variant.'''
    return _build_url(server_url, API_XML, _tree_query(TEST_CONNECTION_INFO))


def create_crumb_url(server_url):
    return _build_url(server_url, CRUMB_URL)
