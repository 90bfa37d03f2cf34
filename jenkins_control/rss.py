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
.. module:: jenkins_control.rss
    :platform: Unix, Windows
    :synopsis: Helpers reading the entry titles of the ``rssLatest`` feed

Jenkins titles its feed entries ``<job name> #<number> (<status text>)``,
e.g. ``my-job #42 (broken since build #40)``.
'''

import re

from jenkins_control.model import BuildStatus

TITLE_PATTERN = re.compile(
    r'^(?P<job>.*) #(?P<number>\d+)(?:\s+\((?P<status>.*)\))?\s*$')

# Checked in order, first match wins: "unstable" contains "stable"
# and "tests are still failing" contains "fail".
_STATUS_KEYWORDS = (
    ('unstable', BuildStatus.UNSTABLE),
    ('test', BuildStatus.UNSTABLE),
    ('not built', BuildStatus.NOT_BUILT),
    ('aborted', BuildStatus.ABORTED),
    ('stable', BuildStatus.SUCCESS),
    ('back to normal', BuildStatus.SUCCESS),
    ('fixed', BuildStatus.SUCCESS),
    ('broken', BuildStatus.FAILURE),
    ('fail', BuildStatus.FAILURE),
)


def _match(title):
    if not title:
        return None
    return TITLE_PATTERN.match(title.strip())


def extract_job_name(title):
    '''Return the job name of an entry title, or None.'''
    match = _match(title)
    if match is None:
        return None
    return match.group('job').strip()


def extract_build_number(title):
    '''Return the build number of an entry title as ``str``, or None.'''
    match = _match(title)
    if match is None:
        return None
    return match.group('number')


def extract_status(title):
    '''Return the :class:`~jenkins_control.model.BuildStatus` of an entry title.

    Builds in progress (``(?)``), titles without a status and unknown
    status texts all give ``BuildStatus.NULL``.
    '''
    match = _match(title)
    if match is None or not match.group('status'):
        return BuildStatus.NULL
    status_text = match.group('status').lower()
    for keyword, status in _STATUS_KEYWORDS:
        if keyword in status_text:
            return status
    return BuildStatus.NULL
