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
.. module:: jenkins_control.config
    :platform: Unix, Windows
    :synopsis: Server connection settings read by the request manager
'''

import collections
import os

from jenkins_control.exceptions import ConfigurationError

DEFAULT_SERVER_URL = 'http://dummyjenkinsserver'
DEFAULT_BUILD_DELAY = 0

FavoriteJob = collections.namedtuple('FavoriteJob', ['name', 'url'])


class JenkinsConfiguration(object):

    def __init__(self, server_url=DEFAULT_SERVER_URL,
                 build_delay=DEFAULT_BUILD_DELAY, favorite_jobs=None):
        '''Settings of one Jenkins connection.

        :param server_url: URL of Jenkins server, ``str``
        :param build_delay: seconds Jenkins waits before starting a
            triggered build, ``int``
        :param favorite_jobs: ordered favorites, ``[FavoriteJob]``
        '''
        self.server_url = server_url
        self.build_delay = build_delay
        self.favorite_jobs = list(favorite_jobs or [])

    @property
    def build_delay(self):
        return self._build_delay

    @build_delay.setter
    def build_delay(self, value):
        try:
            delay = int(value)
        except (TypeError, ValueError):
            raise ConfigurationError(
                'Build delay must be a number of seconds not %r' % (value,))
        if delay < 0:
            raise ConfigurationError(
                'Build delay must be >= 0 not %d' % delay)
        self._build_delay = delay

    @classmethod
    def from_env(cls, environ=None):
        '''Read ``JENKINS_URL`` and ``JENKINS_BUILD_DELAY``.'''
        if environ is None:
            environ = os.environ
        return cls(environ.get('JENKINS_URL', DEFAULT_SERVER_URL),
                   environ.get('JENKINS_BUILD_DELAY', DEFAULT_BUILD_DELAY))

    def is_server_url_set(self):
        return bool(self.server_url) and self.server_url != DEFAULT_SERVER_URL

    def add_favorite(self, name, url):
        if not self.is_favorite(name):
            self.favorite_jobs.append(FavoriteJob(name, url))

    def is_favorite(self, name):
        return any(favorite.name == name for favorite in self.favorite_jobs)

    def remove_favorite(self, name):
        self.favorite_jobs = [favorite for favorite in self.favorite_jobs
                              if favorite.name != name]
