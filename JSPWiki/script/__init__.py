# -*- coding: utf-8 -*-
"""
    JSPWiki - command line interface

    The "jspwiki" command is a Flask command group, so besides the commands
    below it offers the Flask ones (run, shell, routes). The wiki
    configuration file is taken from the JSPWIKI_CONFIG environment variable.

        jspwiki version
        jspwiki modules
        jspwiki import-pages [--author NAME] DIRECTORY
        jspwiki run

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

import os

import click
from flask import current_app
from flask.cli import FlaskGroup

from JSPWiki import log
logging = log.getLogger(__name__)

from JSPWiki import api, config, util
from JSPWiki.app import create_app
from JSPWiki.auth import WikiSession
from JSPWiki.engine import WikiEngine
from JSPWiki.error import WikiError
from JSPWiki.pages import WikiPage

# file name extension of page files in a page directory
PAGE_FILE_EXTENSION = '.txt'


def _create_app():
    return create_app()


@click.group(cls=FlaskGroup, create_app=_create_app)
def cli():
    """ JSPWiki management commands """


@cli.command('version', with_appcontext=False)
def version():
    """ Show the version of the wiki code. """
    click.echo(u'%s %s' % (api.get_platform_name_string(), api.get_platform_version_string()))


@cli.command('modules')
def modules():
    """ List the plugins of the wiki and the wiki versions they work with. """
    engine = WikiEngine.find(current_app)
    for info in engine.plugin_manager.get_modules():
        click.echo(u'%-24s %-8s %-8s %s' % (info.name, info.min_version or u'*', info.max_version or u'*',
                                            info.description or u''))


def read_page_files(directory):
    """
    Yield (page name, text) for the page files in directory, a page file is
    named <page name>.txt.
    """
    for fname in sorted(os.listdir(directory)):
        name, ext = os.path.splitext(fname)
        if ext != PAGE_FILE_EXTENSION or not name:
            continue
        with open(os.path.join(directory, fname), encoding=config.charset) as f:
            yield name, f.read()


@cli.command('import-pages')
@click.option('--author', default=None, help='name recorded as the author of the imported versions')
@click.argument('directory', type=click.Path(exists=True, file_okay=False))
def import_pages(directory, author):
    """ Import the <page name>.txt files of DIRECTORY as new page versions. """
    engine = WikiEngine.find(current_app)
    imported = 0
    for name, text in read_page_files(directory):
        page_name = util.clean_link(name)
        context = api.context().create(engine, WikiPage(engine, page_name))
        context.context.session = WikiSession(engine, author)
        try:
            page = engine.page_manager.save_text(context, text, u'imported from %s' % directory)
        except WikiError as err:
            logging.error("could not import %s: %s", name, err)
            click.echo(u'%s: %s' % (name, err), err=True)
            continue
        if page is None:
            click.echo(u'%s: unchanged' % page_name)
        else:
            click.echo(u'%s: version %d' % (page_name, page.version))
            imported += 1
    click.echo(u'%d pages imported' % imported)


def main():
    cli()
