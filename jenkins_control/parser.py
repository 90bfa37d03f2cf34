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
.. module:: jenkins_control.parser
    :platform: Unix, Windows
    :synopsis: Turn Jenkins XML API documents into domain objects
'''

import collections
import logging
import xml.etree.ElementTree as ET

from jenkins_control import rss
from jenkins_control.exceptions import InvalidResponse
from jenkins_control.exceptions import UnexpectedServerResponse
from jenkins_control.model import Build, BuildStatus, Health, Job, View
from jenkins_control.model import Workspace

logger = logging.getLogger(__name__)

JENKINS_ROOT_TAG = 'jenkins'
HUDSON_ROOT_TAG = 'hudson'
FOLDER_ROOT_TAG = 'folder'
ALLOWED_ROOT_TAGS = (JENKINS_ROOT_TAG, HUDSON_ROOT_TAG, FOLDER_ROOT_TAG)

JENKINS_DESCRIPTION = 'description'

JOB_NAME = 'name'
JOB_URL = 'url'
JOB_COLOR = 'color'
JOB_HEALTH = 'healthReport'
JOB_HEALTH_ICON = 'iconUrl'
JOB_HEALTH_DESCRIPTION = 'description'
JOB_LAST_BUILD = 'lastBuild'
JOB_IS_BUILDABLE = 'buildable'
JOB_IS_IN_QUEUE = 'inQueue'

VIEW = 'view'
PRIMARY_VIEW = 'primaryView'
VIEW_NAME = 'name'
VIEW_URL = 'url'

BUILD_IS_BUILDING = 'building'
BUILD_ID = 'id'
BUILD_RESULT = 'result'
BUILD_URL = 'url'
BUILD_NUMBER = 'number'

PARAMETER_PROPERTY = 'property'
PARAMETER_DEFINITION = 'parameterDefinition'
PARAMETER_NAME = 'name'
PARAMETER_TYPE = 'type'
PARAMETER_DEFAULT_PARAM = 'defaultParameterValue'
PARAMETER_DEFAULT_PARAM_VALUE = 'value'
PARAMETER_CHOICE = 'choice'

RSS_ENTRY = 'entry'
RSS_TITLE = 'title'
RSS_LINK = 'link'
RSS_LINK_HREF = 'href'
RSS_PUBLISHED = 'published'

HEALTH_ICON_SUFFIXES = ('.png', '.gif')


def parse_document(text):
    '''Parse a response body and return its root element.

    External DTDs are neither fetched nor validated.

    :param text: response body, ``str``
    :returns: root ``xml.etree.ElementTree.Element``
    :throws: :class:`InvalidResponse` if the body is not well-formed XML
    '''
    try:
        return ET.fromstring(text)
    except (ET.ParseError, TypeError, ValueError) as e:
        logger.error('Invalid data received from the Jenkins Server. '
                     'Actual :\n%s', text, exc_info=e)
        raise InvalidResponse(
            'Invalid data received from the Jenkins Server. Please retry')


def _local_name(tag):
    # '{http://www.w3.org/2005/Atom}feed' -> 'feed'
    return tag.rsplit('}', 1)[-1]


def _child_text(element, name, required=False):
    child = element.find(name)
    if child is None:
        if required:
            raise InvalidResponse(
                'Element <%s> is missing its required <%s> child'
                % (_local_name(element.tag), _local_name(name)))
        return None
    return child.text if child.text is not None else ''


def check_root(root):
    '''Ensure the document is a Jenkins server object.

    :throws: :class:`UnexpectedServerResponse` for any other root tag
    '''
    if root.tag not in ALLOWED_ROOT_TAGS:
        raise UnexpectedServerResponse(ALLOWED_ROOT_TAGS, root.tag)


def create_workspace(root, server_url):
    '''Build a :class:`Workspace` with its primary view and views.

    :param root: root element of the workspace document
    :param server_url: configured server address, ``str``
    :returns: :class:`~jenkins_control.model.Workspace`
    '''
    check_root(root)
    description = _child_text(root, JENKINS_DESCRIPTION) or ''
    workspace = Workspace(description, server_url)
    workspace.primary_view = create_primary_view(root)
    workspace.views = create_views(root)
    return workspace


def _create_view(element, nested=False):
    name = _child_text(element, VIEW_NAME, required=True)
    url = _child_text(element, VIEW_URL, required=True)
    if nested:
        return View.create_nested(name, url)
    return View.create(name, url)


def create_primary_view(root):
    '''Return the primary view of the workspace document, or None.'''
    element = root.find(PRIMARY_VIEW)
    if element is None:
        return None
    return _create_view(element)


def create_views(root):
    '''Return the views of the workspace document.

    Only two levels are read: top level views and their direct sub-views.
    '''
    views = []
    for element in root.findall(VIEW):
        view = _create_view(element)
        for sub_element in element.findall(VIEW):
            view.add_sub_view(_create_view(sub_element, nested=True))
        views.append(view)
    return views


def create_health(job_element):
    '''Return the :class:`Health` of a job element, or None.

    The icon name is used as the level once its image suffix is removed,
    ``health-80to100.png`` gives ``health-80to100``.
    '''
    element = job_element.find(JOB_HEALTH)
    if element is None:
        return None
    level = _child_text(element, JOB_HEALTH_ICON)
    if not level:
        return None
    for suffix in HEALTH_ICON_SUFFIXES:
        if level.endswith(suffix):
            level = level[:-len(suffix)]
            break
    if not level:
        return None
    return Health(level, _child_text(element, JOB_HEALTH_DESCRIPTION))


def create_last_build(element):
    return Build.from_workspace(
        _child_text(element, BUILD_URL, required=True),
        _child_text(element, BUILD_NUMBER, required=True),
        _child_text(element, BUILD_RESULT),
        _child_text(element, BUILD_IS_BUILDING),
        _child_text(element, BUILD_ID))


def _extract_choices(definition):
    return tuple(choice.text or '' for choice in definition.findall(PARAMETER_CHOICE))


def _add_parameters(job, definitions):
    for definition in definitions:
        default_value = None
        default_element = definition.find(PARAMETER_DEFAULT_PARAM)
        if default_element is not None:
            default_value = _child_text(default_element, PARAMETER_DEFAULT_PARAM_VALUE)
        job.add_parameter(
            _child_text(definition, PARAMETER_NAME, required=True),
            _child_text(definition, PARAMETER_TYPE),
            default_value,
            _extract_choices(definition))


def create_job(element):
    '''Build a :class:`Job` from a job element.

    The element is either the root of a job document or a ``job`` child of
    a view document.

    :param element: job ``Element``
    :returns: :class:`~jenkins_control.model.Job`
    '''
    job = Job.create(_child_text(element, JOB_NAME, required=True),
                     _child_text(element, JOB_COLOR),
                     _child_text(element, JOB_URL, required=True),
                     _child_text(element, JOB_IS_IN_QUEUE),
                     _child_text(element, JOB_IS_BUILDABLE))
    job.health = create_health(element)

    last_build = element.find(JOB_LAST_BUILD)
    if last_build is not None:
        job.last_build = create_last_build(last_build)

    for prop in element.findall(PARAMETER_PROPERTY):
        definitions = prop.findall(PARAMETER_DEFINITION)
        if definitions:
            _add_parameters(job, definitions)
    return job


def create_latest_builds(root):
    '''Read the ``rssLatest`` feed into an ordered ``{job name: Build}``.

    Entries whose status cannot be surfaced (``BuildStatus.NULL``) are
    skipped. When two entries name the same job the later one wins while
    the key keeps its first position.

    :param root: root element of the feed
    :returns: ``collections.OrderedDict``
    '''
    namespace = ''
    if root.tag.startswith('{'):
        namespace = root.tag[:root.tag.index('}') + 1]

    builds = collections.OrderedDict()
    for entry in root.findall(namespace + RSS_ENTRY):
        title = _child_text(entry, namespace + RSS_TITLE)
        status = rss.extract_status(title)
        if status is BuildStatus.NULL:
            continue

        link = entry.find(namespace + RSS_LINK)
        href = link.get(RSS_LINK_HREF) if link is not None else None
        if href is None:
            raise InvalidResponse(
                'Feed entry %r has no <link href="..."/>' % title)
        builds[rss.extract_job_name(title)] = Build.from_rss(
            href,
            rss.extract_build_number(title),
            status,
            False,
            _child_text(entry, namespace + RSS_PUBLISHED),
            title)
    return builds
