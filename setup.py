#!/usr/bin/env python
"""
JSPWiki
-------

JSPWiki is a server-rendered wiki: it serves, renders and lets users edit
versioned wiki pages through a browser and offers an XML-RPC API for
remote clients. Pages are written in JSPWiki markup; access is controlled
by a security policy and per-page ACLs.

Links
`````

* `JSPWiki <https://jspwiki.apache.org/>`_
"""

import os

from setuptools import setup, find_packages


def read_version():
    fname = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'JSPWiki', 'version.conf')
    with open(fname) as f:
        return f.read().strip()


setup_args = dict(
    name="jspwiki",
    version=read_version(),
    description="JSPWiki is a server-rendered wiki with an XML-RPC API",
    author="JSPWiki contributors",
    license="GNU GPL",
    long_description=__doc__,
    keywords="wiki web",
    platforms="any",
    classifiers="""\
Development Status :: 3 - Alpha
Environment :: Web Environment
Intended Audience :: Information Technology
License :: OSI Approved :: GNU General Public License (GPL)
Natural Language :: English
Operating System :: OS Independent
Programming Language :: Python
Programming Language :: Python :: 3
Topic :: Internet :: WWW/HTTP :: WSGI
Topic :: Internet :: WWW/HTTP :: WSGI :: Application
Topic :: Internet :: WWW/HTTP :: Dynamic Content
Topic :: Office/Business :: Groupware
Topic :: Text Processing :: Markup""".splitlines(),

    packages=find_packages(exclude=['*._tests', ]),

    package_data={'JSPWiki': ['version.conf', 'templates/*.html', ],
                  'JSPWiki.config': ['jspwiki.properties', ],
                 },
    zip_safe=False,
    python_requires='>=3.8',
    install_requires=[
        'blinker>=1.6',
        'click>=8.0',
        'Flask>=2.3',
        'Flask-Babel>=3.0',
        'Flask-Caching>=2.0',
        'emeraldtree>=0.10',
        'Jinja2>=3.0',
        'MarkupSafe>=2.0',
        'pygments>=2.0',
        'sqlalchemy>=1.4',
        'Werkzeug>=2.3',
    ],
    # optional features and their list of requirements
    extras_require = {
        'test': ["pytest"],
    },
    entry_points = dict(
        console_scripts = ['jspwiki = JSPWiki.script:main'],
    ),
)

if __name__ == '__main__':
    setup(**setup_args)
