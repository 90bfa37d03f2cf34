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
.. module:: jenkins_control.security
    :platform: Unix, Windows
    :synopsis: Authenticated HTTP transport for the request manager
'''

import enum
import json
import logging
import os
import socket

import requests
import requests.exceptions as req_exc
from requests.packages.urllib3.exceptions import InsecureRequestWarning

from jenkins_control import endpoints
from jenkins_control.exceptions import ConfigurationError
from jenkins_control.exceptions import EmptyResponseException
from jenkins_control.exceptions import NotFoundException
from jenkins_control.exceptions import TimeoutException
from jenkins_control.exceptions import TransportFailure

logger = logging.getLogger(__name__)

CRUMB_FIELD = 'Jenkins-Crumb'


class SecurityMode(enum.Enum):
    NONE = 'none'
    BASIC = 'basic'
    TOKEN = 'token'
    CRUMB = 'crumb'


class WrappedSession(requests.Session):
    """A wrapper for requests.Session to override 'verify' property, ignoring REQUESTS_CA_BUNDLE environment variable.

    This is a workaround for https://github.com/kennethreitz/requests/issues/3829 (will be fixed in requests 3.0.0)
    """

    def merge_environment_settings(self, url, proxies, stream, verify, *args,
                                   **kwargs):
        if self.verify is False:
            verify = False

        return super(WrappedSession, self).merge_environment_settings(url,
                                                                      proxies,
                                                                      stream,
                                                                      verify,
                                                                      *args,
                                                                      **kwargs)


class SecurityClient(object):

    def __init__(self, server_url=None, auth=None, crumb=None, use_crumb=False,
                 crumb_field=CRUMB_FIELD,
                 timeout=socket._GLOBAL_DEFAULT_TIMEOUT):
        '''Create the HTTP transport of a session.

        :param server_url: URL of Jenkins server, needed to fetch crumbs, ``str``
        :param auth: ``requests`` auth object, or None for anonymous access
        :param crumb: CSRF crumb value sent with ``POST`` requests, ``str``.
            When None and ``use_crumb`` is set, it is fetched from the
            server on first use.
        :param use_crumb: send a crumb with ``POST`` requests, ``bool``
        :param crumb_field: header carrying ``crumb``, ``str``
        :param timeout: Server connection timeout in secs (default: not set), ``int``
        '''
        self.server_url = server_url
        self.auth = auth
        self.crumb = None
        if crumb:
            self.crumb = {'crumbRequestField': crumb_field, 'crumb': crumb}
        self.use_crumb = use_crumb or crumb is not None
        self.timeout = timeout
        self._session = WrappedSession()
        self._session.auth = auth

        extra_headers = os.environ.get("JENKINS_API_EXTRA_HEADERS", "")
        if extra_headers:
            logger.warning("JENKINS_API_EXTRA_HEADERS adds these HTTP headers: %s", extra_headers.split("\n"))
        for token in extra_headers.split("\n"):
            if ":" in token:
                header, value = token.split(":", 1)
                self._session.headers[header] = value.strip()

        if os.getenv('PYTHONHTTPSVERIFY', '1') == '0':
            logger.debug('PYTHONHTTPSVERIFY=0 detected so we will '
                         'disable requests library SSL verification.')
            requests.packages.urllib3.disable_warnings(InsecureRequestWarning)
            self._session.verify = False

    def maybe_add_crumb(self, req):
        if not self.use_crumb:
            return
        # We don't know yet whether the server issues crumbs
        if self.crumb is None and self.server_url is None:
            self.crumb = False
        if self.crumb is None:
            crumb_url = endpoints.create_crumb_url(self.server_url)
            try:
                response = self.jenkins_request(
                    requests.Request('GET', crumb_url), add_crumb=False)
            except (NotFoundException, EmptyResponseException):
                self.crumb = False
            else:
                try:
                    self.crumb = json.loads(response.text)
                except ValueError:
                    self.crumb = False
        if self.crumb:
            req.headers[self.crumb['crumbRequestField']] = self.crumb['crumb']

    def _response_handler(self, response):
        '''Handle response objects'''

        # raise exceptions if occurred
        response.raise_for_status()

        headers = response.headers
        if (headers.get('content-length') is None and
                headers.get('transfer-encoding') is None and
                headers.get('location') is None and
                (response.content is None or len(response.content) <= 0)):
            # response body should only exist if one of these is provided
            raise EmptyResponseException(
                "Error communicating with server[%s]: "
                "empty response" % response.url)

        return response

    def _request(self, req):

        r = self._session.prepare_request(req)
        # requests.Session.send() does not honor env settings by design
        # see https://github.com/requests/requests/issues/2807
        _settings = self._session.merge_environment_settings(
            r.url, {}, None, self._session.verify, None)
        if self.timeout is not socket._GLOBAL_DEFAULT_TIMEOUT:
            _settings['timeout'] = self.timeout
        return self._session.send(r, **_settings)

    def jenkins_request(self, req, add_crumb=True):
        '''Utility routine for opening an HTTP request to a Jenkins server.

        :param req: A ``requests.Request`` to submit.
        :param add_crumb: If True, try to add a crumb header to this ``req``
                          before submitting. Defaults to ``True``.
        :returns: A ``requests.Response`` object.
        '''
        try:
            if add_crumb:
                self.maybe_add_crumb(req)

            return self._response_handler(
                self._request(req))

        except req_exc.HTTPError as e:
            # Jenkins's funky authentication means its nigh impossible to
            # distinguish errors.
            if e.response.status_code in [401, 403, 500]:
                msg = 'Error in request. ' + \
                      'Possibly authentication failed [%s]: %s' % (
                          e.response.status_code, e.response.reason)
                if e.response.text:
                    msg += '\n' + e.response.text
                raise TransportFailure(msg)
            elif e.response.status_code == 404:
                raise NotFoundException('Requested item could not be found')
            else:
                raise TransportFailure('Error in request: %s' % e)
        except req_exc.Timeout as e:
            raise TimeoutException('Error in request: %s' % (e))
        except req_exc.RequestException as e:
            raise TransportFailure('Error in request: %s' % (e))

    def connect(self, url):
        '''Check that the server answers with these credentials.

        :param url: authentication URL, ``str``
        :returns: response body, ``str``
        '''
        logger.debug('Connecting to %s', url)
        return self.jenkins_request(
            requests.Request('GET', url), add_crumb=False).text

    def execute(self, url, method='GET'):
        '''Return the HTTP response body of ``url``.

        A crumb is only sent with ``POST`` requests.

        :param url: target URL, ``str``
        :param method: HTTP method, ``str``
        :returns: ``str``
        '''
        logger.debug('%s %s', method, url)
        return self.jenkins_request(
            requests.Request(method, url), add_crumb=(method == 'POST')).text


def create_security_client(server_url, security_mode=SecurityMode.NONE, username=None,
                           password=None, crumb_data=None,
                           crumb_field=CRUMB_FIELD,
                           timeout=socket._GLOBAL_DEFAULT_TIMEOUT):
    '''Create the transport for a security mode.

    :param server_url: URL of Jenkins server, ``str``
    :param security_mode: :class:`SecurityMode`
    :param username: Server username, ``str``
    :param password: Server password or API token, ``str``
    :param crumb_data: CSRF crumb to send, ``str``; fetched from the
        server when omitted in ``CRUMB`` mode
    :param crumb_field: header carrying ``crumb_data``, ``str``
    :param timeout: Server connection timeout in secs (default: not set), ``int``
    :returns: :class:`SecurityClient`
    :throws: :class:`ConfigurationError` when credentials are missing
    '''
    security_mode = SecurityMode(security_mode)
    if security_mode is SecurityMode.NONE:
        return SecurityClient(server_url, crumb=crumb_data,
                              crumb_field=crumb_field, timeout=timeout)

    if username is None or password is None:
        raise ConfigurationError(
            'Security mode %s requires a username and a password'
            % security_mode.value)
    auth = requests.auth.HTTPBasicAuth(
        username.encode('utf-8'), password.encode('utf-8'))
    return SecurityClient(server_url, auth=auth, crumb=crumb_data,
                          crumb_field=crumb_field,
                          use_crumb=security_mode is SecurityMode.CRUMB,
                          timeout=timeout)
