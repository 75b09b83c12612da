import pytest

from lockparse.gemfile import parse_gemfile_lock, parse_gemfile_lock_text
from lockparse.types import Ecosystem, LockfileError, PackageDetails


def _gem(name, version, commit=""):
    return PackageDetails(
        name=name,
        version=version,
        ecosystem=Ecosystem.BUNDLER,
        compare_as=Ecosystem.BUNDLER,
        commit=commit,
    )


def _write(tmp_path, text):
    target = tmp_path / "Gemfile.lock"
    target.write_text(text)
    return str(target)


FOOTER = """
PLATFORMS
  x86_64-linux

DEPENDENCIES
  pry

BUNDLED WITH
   2.2.28
"""


def test_file_does_not_exist(tmp_path):
    with pytest.raises(LockfileError, match="could not read"):
        parse_gemfile_lock(str(tmp_path / "does-not-exist"))


def test_no_spec_section(tmp_path):
    assert parse_gemfile_lock(_write(tmp_path, "BUNDLED WITH\n   2.2.28\n")) == []


def test_no_gem_section(tmp_path):
    assert parse_gemfile_lock(_write(tmp_path, FOOTER)) == []


def test_no_gems(tmp_path):
    text = "GEM\n  remote: https://gems.example.com/\n  specs:\n" + FOOTER
    assert parse_gemfile_lock(_write(tmp_path, text)) == []


def test_one_gem(tmp_path):
    text = "GEM\n  remote: https://gems.example.com/\n  specs:\n    ast (2.4.2)\n" + FOOTER
    assert parse_gemfile_lock(_write(tmp_path, text)) == [_gem("ast", "2.4.2")]


def test_some_gems(tmp_path):
    text = (
        "GEM\n"
        "  remote: https://gems.example.com/\n"
        "  specs:\n"
        "    coderay (1.1.3)\n"
        "    method_source (1.0.0)\n"
        "    pry (0.14.1)\n"
        "      coderay (~> 1.1)\n"
        "      method_source (~> 1.0)\n" + FOOTER
    )
    assert parse_gemfile_lock(_write(tmp_path, text)) == [
        _gem("coderay", "1.1.3"),
        _gem("method_source", "1.0.0"),
        _gem("pry", "0.14.1"),
    ]


def test_multiple_gems_with_windows_line_endings(tmp_path):
    text = (
        "GEM\r\n"
        "  remote: https://gems.example.com/\r\n"
        "  specs:\r\n"
        "    bundler-audit (0.9.0.1)\r\n"
        "      bundler (>= 1.2.0, < 3)\r\n"
        "      thor (~> 1.0)\r\n"
        "    coderay (1.1.3)\r\n"
        "    dotenv (2.7.6)\r\n"
        "    method_source (1.0.0)\r\n"
        "    pry (0.14.1)\r\n"
        "    thor (1.2.1)\r\n"
        "\r\n"
        "PLATFORMS\r\n"
        "  ruby\r\n"
    )
    assert parse_gemfile_lock(_write(tmp_path, text)) == [
        _gem("bundler-audit", "0.9.0.1"),
        _gem("coderay", "1.1.3"),
        _gem("dotenv", "2.7.6"),
        _gem("method_source", "1.0.0"),
        _gem("pry", "0.14.1"),
        _gem("thor", "1.2.1"),
    ]


def test_rubocop(tmp_path):
    text = (
        "GEM\n"
        "  remote: https://gems.example.com/\n"
        "  specs:\n"
        "    ast (2.4.2)\n"
        "    parallel (1.21.0)\n"
        "    parser (3.1.1.0)\n"
        "      ast (~> 2.4.1)\n"
        "    rainbow (3.1.1)\n"
        "    regexp_parser (2.2.1)\n"
        "    rexml (3.2.5)\n"
        "    rubocop (1.25.1)\n"
        "      parallel (~> 1.10)\n"
        "      parser (>= 3.1.0.0)\n"
        "      rubocop-ast (>= 1.15.1, < 2.0)\n"
        "    rubocop-ast (1.16.0)\n"
        "      parser (>= 3.1.1.0)\n"
        "    ruby-progressbar (1.11.0)\n"
        "    unicode-display_width (2.1.0)\n"
        "\n"
        "PLATFORMS\n"
        "  x86_64-linux\n"
        "\n"
        "DEPENDENCIES\n"
        "  rubocop\n"
        "\n"
        "RUBY VERSION\n"
        "   ruby 3.1.1p18\n"
        "\n"
        "BUNDLED WITH\n"
        "   2.3.7\n"
    )
    assert parse_gemfile_lock(_write(tmp_path, text)) == [
        _gem("ast", "2.4.2"),
        _gem("parallel", "1.21.0"),
        _gem("parser", "3.1.1.0"),
        _gem("rainbow", "3.1.1"),
        _gem("regexp_parser", "2.2.1"),
        _gem("rexml", "3.2.5"),
        _gem("rubocop", "1.25.1"),
        _gem("rubocop-ast", "1.16.0"),
        _gem("ruby-progressbar", "1.11.0"),
        _gem("unicode-display_width", "2.1.0"),
    ]


def test_has_local_gem_and_platform_version():
    text = (
        "PATH\n"
        "  remote: .\n"
        "  specs:\n"
        "    backbone-on-rails (1.2.0.0)\n"
        "      eco\n"
        "\n"
        "GEM\n"
        "  remote: https://gems.example.com/\n"
        "  specs:\n"
        "    eco (1.0.0)\n"
        "      eco-source\n"
        "    nokogiri (1.13.3-x86_64-linux)\n"
        "      racc (~> 1.4)\n"
        "    eco-source (1.1.0.rc.1)\n"
        "\n"
        "PLATFORMS\n"
        "  x86_64-linux\n"
    )
    assert parse_gemfile_lock_text(text) == [
        _gem("backbone-on-rails", "1.2.0.0"),
        _gem("eco", "1.0.0"),
        _gem("nokogiri", "1.13.3"),
        _gem("eco-source", "1.1.0.rc.1"),
    ]


def test_has_git_gem():
    text = (
        "GIT\n"
        "  remote: https://git.example.com/hanami/controller.git\n"
        "  revision: 027dbe2e56397b534e859fc283990cad1b6addd6\n"
        "  branch: main\n"
        "  specs:\n"
        "    hanami-controller (2.0.0.alpha1)\n"
        "      hanami-utils (~> 2.0.alpha)\n"
        "      rack (~> 2.0)\n"
        "\n"
        "GIT\n"
        "  remote: https://git.example.com/hanami/utils.git\n"
        "  revision: 5904fc9a70683b8749aa2861257d0c8c01eae4aa\n"
        "  branch: main\n"
        "  specs:\n"
        "    hanami-utils (2.0.0.alpha1)\n"
        "      concurrent-ruby (~> 1.0)\n"
        "      transproc (~> 1.0)\n"
        "\n"
        "GEM\n"
        "  remote: https://gems.example.com/\n"
        "  specs:\n"
        "    concurrent-ruby (1.1.7)\n"
        "    rack (2.2.3)\n"
        "    transproc (1.1.1)\n"
        + FOOTER
    )
    assert parse_gemfile_lock_text(text) == [
        _gem("hanami-controller", "2.0.0.alpha1", "027dbe2e56397b534e859fc283990cad1b6addd6"),
        _gem("hanami-utils", "2.0.0.alpha1", "5904fc9a70683b8749aa2861257d0c8c01eae4aa"),
        _gem("concurrent-ruby", "1.1.7"),
        _gem("rack", "2.2.3"),
        _gem("transproc", "1.1.1"),
    ]