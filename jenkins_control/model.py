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
.. module:: jenkins_control.model
    :platform: Unix, Windows
    :synopsis: Domain objects built from Jenkins responses
'''

import collections
import enum


class BuildStatus(enum.Enum):
    '''Outcome of a build, as shown by the plugin.

    ``NULL`` marks entries that should not be surfaced at all (a build
    still running in the RSS feed, an unknown color...).
    '''

    SUCCESS = 'Success'
    UNSTABLE = 'Unstable'
    FAILURE = 'Failure'
    ABORTED = 'Aborted'
    NOT_BUILT = 'NotBuilt'
    DISABLED = 'Disabled'
    NULL = 'Null'

    @classmethod
    def from_color(cls, color):
        '''Map a job ``color`` token (``blue``, ``red_anime``...) to a status.

        :param color: color token reported by Jenkins, ``str`` or None
        :returns: :class:`BuildStatus`
        '''
        if not color:
            return cls.NULL
        color = color.lower()
        if color.endswith(ANIME_SUFFIX):
            color = color[:-len(ANIME_SUFFIX)]
        return _STATUS_BY_COLOR.get(color, cls.NULL)

    @classmethod
    def from_result(cls, result):
        '''Map a build ``result`` token (``SUCCESS``, ``FAILURE``...) to a status.

        A running build has no result yet and maps to ``NULL``.

        :param result: result token, ``str`` or None
        :returns: :class:`BuildStatus`
        '''
        if not result:
            return cls.NULL
        return _STATUS_BY_RESULT.get(result.strip().upper(), cls.NULL)


ANIME_SUFFIX = '_anime'

_STATUS_BY_COLOR = {
    'blue': BuildStatus.SUCCESS,
    'yellow': BuildStatus.UNSTABLE,
    'red': BuildStatus.FAILURE,
    'aborted': BuildStatus.ABORTED,
    'notbuilt': BuildStatus.NOT_BUILT,
    'grey': BuildStatus.NOT_BUILT,
    'disabled': BuildStatus.DISABLED,
}

_STATUS_BY_RESULT = {
    'SUCCESS': BuildStatus.SUCCESS,
    'UNSTABLE': BuildStatus.UNSTABLE,
    'FAILURE': BuildStatus.FAILURE,
    'ABORTED': BuildStatus.ABORTED,
    'NOT_BUILT': BuildStatus.NOT_BUILT,
}


def to_bool(value):
    '''Coerce an XML text field (``"true"``/``"false"``) to a ``bool``.'''
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return value.strip().lower() == 'true'


def to_int(value):
    '''Coerce an XML text field to an ``int``; ``None`` when not a number.'''
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


Health = collections.namedtuple('Health', ['level', 'description'])

JobParameter = collections.namedtuple(
    'JobParameter', ['name', 'type', 'default_value', 'choices'])


class Build(object):

    def __init__(self, url, number, status, building=False, date=None,
                 title=None):
        self.url = url
        self.number = number
        self.status = status
        self.building = building
        self.date = date
        self.title = title

    @classmethod
    def from_workspace(cls, url, number, result, building, date):
        '''Create a build from the ``lastBuild`` block of a job document.

        All values are the raw text fields of the document.
        '''
        return cls(url, to_int(number), BuildStatus.from_result(result),
                   to_bool(building), date)

    @classmethod
    def from_rss(cls, url, number, status, building, date, title):
        '''Create a build from an entry of the ``rssLatest`` feed.'''
        return cls(url, to_int(number), status, to_bool(building), date,
                   title)

    @property
    def has_title(self):
        return self.title is not None

    def __eq__(self, other):
        if not isinstance(other, Build):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __repr__(self):
        return '<Build %s #%s %s>' % (self.url, self.number, self.status.name)


class Job(object):

    def __init__(self, name, url, color=None, buildable=False, in_queue=False,
                 health=None, last_build=None, parameters=()):
        self.name = name
        self.url = url
        self.color = color
        self.buildable = buildable
        self.in_queue = in_queue
        self.health = health
        self.last_build = last_build
        self.parameters = tuple(parameters)

    @classmethod
    def create(cls, name, color, url, in_queue, buildable):
        '''Create a job from the raw text fields of a job element.'''
        return cls(name, url, color=color, buildable=to_bool(buildable),
                   in_queue=to_bool(in_queue))

    def add_parameter(self, name, type_, default_value=None, choices=()):
        self.parameters = self.parameters + (
            JobParameter(name, type_, default_value, tuple(choices or ())),)

    @property
    def status(self):
        return BuildStatus.from_color(self.color)

    @property
    def is_building(self):
        return bool(self.color) and self.color.endswith(ANIME_SUFFIX)

    @property
    def is_parameterized(self):
        return bool(self.parameters)

    def __repr__(self):
        return '<Job %s>' % self.name


class View(object):

    def __init__(self, name, url, nested=False):
        self.name = name
        self.url = url
        self.nested = nested
        self.sub_views = []

    @classmethod
    def create(cls, name, url):
        return cls(name, url)

    @classmethod
    def create_nested(cls, name, url):
        return cls(name, url, nested=True)

    def add_sub_view(self, view):
        self.sub_views.append(view)

    @property
    def has_sub_views(self):
        return bool(self.sub_views)

    def __repr__(self):
        return '<View %s>' % self.name


class Workspace(object):
    '''Top level server object: description, primary view and views.'''

    def __init__(self, description, server_url):
        self.description = description
        self.server_url = server_url
        self.primary_view = None
        self.views = []

    def get_view(self, name):
        '''Look up a view by name, including nested views.

        :param name: view name, ``str``
        :returns: :class:`View` or None
        '''
        for view in self.views:
            if view.name == name:
                return view
            for sub_view in view.sub_views:
                if sub_view.name == name:
                    return sub_view
        return None
