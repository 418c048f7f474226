# -*- coding: utf-8 -*-
"""
    JSPWiki - command line interface Tests

    @copyright: 2026 JSPWiki contributors
    @license: GNU GPL, see COPYING for details.
"""

from JSPWiki._tests import save_page
from JSPWiki.script import cli, read_page_files


def make_page_dir(tmp_path):
    (tmp_path / 'Main.txt').write_text(u'Welcome to the wiki\n', encoding='utf-8')
    (tmp_path / 'Other.txt').write_text(u'Another page\n', encoding='utf-8')
    (tmp_path / 'notes.md').write_text(u'not a page\n', encoding='utf-8')
    return tmp_path


def test_read_page_files(tmp_path):
    pages = list(read_page_files(str(make_page_dir(tmp_path))))
    assert pages == [(u'Main', u'Welcome to the wiki\n'), (u'Other', u'Another page\n')]


class TestCommands(object):
    def invoke(self, *args):
        runner = self.app.test_cli_runner()
        return runner.invoke(cli, list(args))

    def test_version(self):
        result = self.invoke('version')
        assert result.exit_code == 0
        assert result.output == u'JSPWiki 2.12.2\n'

    def test_modules(self):
        result = self.invoke('modules')
        assert result.exit_code == 0
        assert u'IndexPlugin' in result.output
        assert u'CurrentTimePlugin' in result.output

    def test_import_pages(self, tmp_path):
        save_page(self.engine, u'Other', u'Another page\n')
        result = self.invoke('import-pages', '--author', 'Janne', str(make_page_dir(tmp_path)))
        assert result.exit_code == 0
        assert u'Main: version 1\n' in result.output
        assert u'Other: unchanged\n' in result.output
        assert result.output.endswith(u'1 pages imported\n')
        page = self.engine.page_manager.get_page(u'Main')
        assert page.author == u'Janne'
        assert self.engine.page_manager.get_pure_text(u'Main') == u'Welcome to the wiki\n'

    def test_import_missing_directory(self, tmp_path):
        result = self.invoke('import-pages', str(tmp_path / 'missing'))
        assert result.exit_code == 2
