# -*- coding: utf-8 -*-
"""JSPWiki - Configuration of a personal / development wiki

ONLY to be used if you run a personal wiki on your notebook or PC.

This is NOT intended for internet or server or multiuser use due to relaxed security settings!
"""

import os

from JSPWiki.config.default import DefaultConfig


class LocalConfig(DefaultConfig):
    # vvv DON'T TOUCH THIS EXCEPT IF YOU KNOW WHAT YOU DO vvv
    # Directory containing THIS wikiconfig:
    wikiconfig_dir = os.path.abspath(os.path.dirname(__file__))

    # We assume this structure for a simple "unpack and run" scenario:
    # wikiconfig.py
    # wiki/
    #      wiki.db
    # If that's not true, feel free to just set instance_dir to the real path.
    instance_dir = os.path.join(wikiconfig_dir, 'wiki')

    # pages are kept in a sqlite database, use 'memory:' for a volatile wiki
    storage_uri = 'sqla:sqlite:///%s' % os.path.join(instance_dir, 'wiki.db')

    # relaxed security policy for the development wiki:
    security_policy = {
        'All': ['*'],
    }
    # ^^^ DON'T TOUCH THIS EXCEPT IF YOU KNOW WHAT YOU DO ^^^

    properties = {
        'jspwiki.applicationName': u'JSPWiki Personal Edition',
        #'jspwiki.frontPage': u'FrontPage', # change to some better value
    }

    # Add your configuration items here.
    secrets = 'This string is NOT a secret, please make up your own, long, random secret string!'

# DEVELOPERS! Do not add your configuration items there,
# you could accidentally commit them! Instead, create a
# wikiconfig_local.py file containing this:
#
# from wikiconfig import LocalConfig
#
# class Config(LocalConfig):
#     configuration_item_1 = 'value1'
#

try:
    from wikiconfig_local import Config
except ImportError as err:
    if err.name != 'wikiconfig_local':
        raise
    Config = LocalConfig

if not os.path.isdir(Config.instance_dir):
    os.makedirs(Config.instance_dir)

# create_app() looks for the wiki configuration class here
JSPWIKICFG = Config
