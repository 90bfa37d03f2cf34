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
.. module:: jenkins_control.variants
    :platform: Unix, Windows
    :synopsis: Classic vs. folder-based response shapes
'''

import enum
import logging

from jenkins_control import parser
from jenkins_control.exceptions import UnknownPlatformVariant

logger = logging.getLogger(__name__)

# Present in the authentication response of folder-based servers
FOLDER_MARKER = 'folder'

JOB = 'job'
VIEW = 'view'


class PlatformVariant(enum.Enum):
    '''Response dialect of the server.

    ``CLASSIC`` servers list jobs directly under the view element,
    ``FOLDER_BASED`` servers (CloudBees folders) wrap them one view deeper.
    '''

    CLASSIC = 'classic'
    FOLDER_BASED = 'folder_based'


def detect_variant(text):
    '''Guess the platform variant from the raw authentication response.

    :param text: body of the authentication request, ``str``
    :returns: :class:`PlatformVariant`
    '''
    if text and FOLDER_MARKER in text:
        variant = PlatformVariant.FOLDER_BASED
    else:
        variant = PlatformVariant.CLASSIC
    logger.debug('Detected %s platform', variant.value)
    return variant


def job_elements(variant, root):
    '''Return the job elements of a parsed view document.

    :param variant: :class:`PlatformVariant` of the session
    :param root: root ``Element`` of the view document
    :returns: list of job ``Element``
    '''
    if variant is PlatformVariant.CLASSIC:
        return root.findall(JOB)
    elif variant is PlatformVariant.FOLDER_BASED:
        nested_view = root.find(VIEW)
        if nested_view is None:
            return []
        return nested_view.findall(JOB)
    raise UnknownPlatformVariant(variant)


def list_jobs(variant, root):
    '''List the jobs of a parsed view document.

    :param variant: :class:`PlatformVariant` of the session
    :param root: root ``Element`` of the view document
    :returns: list of :class:`~jenkins_control.model.Job` in document order
    '''
    return [parser.create_job(element) for element in job_elements(variant, root)]
