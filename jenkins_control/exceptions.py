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
.. module:: jenkins_control.exceptions
    :platform: Unix, Windows
    :synopsis: Exception types raised by the request pipeline
'''


class JenkinsException(Exception):
    '''General exception type for jenkins-control failures.'''
    pass


class InvalidTarget(JenkinsException, ValueError):
    '''A request URL could not be assembled from the given inputs.'''
    pass


class UnknownPlatformVariant(InvalidTarget):
    '''The session holds a value that is not a :class:`PlatformVariant`.'''

    def __init__(self, variant):
        self.variant = variant
        super(UnknownPlatformVariant, self).__init__(
            'Unknown platform variant: %r' % (variant,))


class TransportFailure(JenkinsException):
    '''The HTTP exchange with the server failed.'''
    pass


class NotFoundException(TransportFailure):
    '''A special exception to call out the case of receiving a 404.'''
    pass


class EmptyResponseException(TransportFailure):
    '''A special exception to call out the case receiving an empty response.'''
    pass


class TimeoutException(TransportFailure):
    '''A special exception to call out in the case of a socket timeout.'''


class InvalidResponse(JenkinsException):
    '''The response body is not usable XML.'''
    pass


class UnexpectedServerResponse(JenkinsException):
    '''Well-formed XML whose root element is not a Jenkins server object.

    This usually means the configured URL points at something other than
    Jenkins (a proxy login page, another application...).
    '''

    def __init__(self, allowed, actual):
        self.allowed = tuple(allowed)
        self.actual = actual
        super(UnexpectedServerResponse, self).__init__(
            "The root tag should be one of %s. Actual: '%s'"
            % (', '.join(self.allowed), actual))


class ConfigurationError(JenkinsException):
    '''The plugin configuration does not match what the server reports.'''
    pass
