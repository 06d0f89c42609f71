"""
Tests for claw_readme.scanner module.

Tests each recognizer rule on its own, the stoplists, and file scanning.
"""

import pytest

from claw_readme.manifest import manifest_from_dict
from claw_readme.scanner import (
    COMMAND_RULES,
    FLAG_RULES,
    candidate_files,
    find_commands,
    find_flags,
    find_usage,
    is_flag_candidate,
    property_to_flag,
    scan_sources,
)


def rule(rules, name):
    return next(r for r in rules if r.name == name)


class TestCommandRules:
    """Tests for the individual command recognizers."""

    def test_case_label(self):
        text = "switch (cmd) {\n  case 'build':\n  case \"serve\" :\n  case `lint`:\n}"

        assert list(rule(COMMAND_RULES, "case-label").candidates(text)) == [
            "build", "serve", "lint",
        ]

    def test_positional_arg(self):
        text = "if (args[0] === 'deploy') {} else if (args[0] == \"init\") {}"

        assert list(rule(COMMAND_RULES, "positional-arg").candidates(text)) == [
            "deploy", "init",
        ]

    def test_command_variable(self):
        text = "if (command === 'sync') run();"

        assert list(rule(COMMAND_RULES, "command-variable").candidates(text)) == ["sync"]

    def test_if_equality(self):
        text = "if (sub === 'serve') { }\nif ( mode == 'watch' ) { }"

        assert list(rule(COMMAND_RULES, "if-equality").candidates(text)) == [
            "serve", "watch",
        ]


class TestFindCommands:
    """Tests for find_commands()."""

    def test_stoplist_exclusion(self):
        """Generic tokens such as help and version are not commands."""
        text = "case 'help':\ncase 'version':\ncase 'deploy':\n"

        assert find_commands(text) == {"deploy"}

    def test_stoplist_is_case_insensitive(self):
        text = "case 'Help':\ncase 'DEFAULT':\ncase 'Build':\n"

        assert find_commands(text) == {"Build"}

    def test_overlapping_rules_deduplicated(self):
        """A literal found by several rules appears once."""
        text = "if (command === 'build') {}\nswitch (command) { case 'build': }"

        assert find_commands(text) == {"build"}

    def test_flag_literals_are_not_commands(self):
        assert find_commands("case '--force':") == set()


class TestFlagRules:
    """Tests for the individual flag recognizers."""

    def test_flag_literal(self):
        text = (
            "if (args.includes('--force')) {}\n"
            "if (argv.indexOf(\"-v\") >= 0) {}\n"
            "if (a === '--dry-run') {}\n"
            "switch (a) { case '--out': }\n"
        )

        assert list(rule(FLAG_RULES, "flag-literal").candidates(text)) == [
            "--force", "-v", "--dry-run", "--out",
        ]

    def test_options_property(self):
        text = "if (opts.force) {}\nif (flags.v) {}\nconst n = argv.name;"

        assert list(rule(FLAG_RULES, "options-property").candidates(text)) == [
            "--force", "-v", "--name",
        ]

    def test_options_property_needs_word_boundary(self):
        assert list(rule(FLAG_RULES, "options-property").candidates("myopts.force")) == []


class TestFindFlags:
    """Tests for find_flags()."""

    def test_long_property_normalized(self):
        assert find_flags("if (opts.force) {}") == {"--force"}

    def test_single_letter_property_normalized(self):
        assert find_flags("if (opts.f) {}") == {"-f"}

    def test_array_methods_rejected(self):
        text = "argv.slice(2); flags.map(x => x); opts.length; argv.forEach(f);"

        assert find_flags(text) == set()

    def test_placeholder_names_rejected(self):
        assert find_flags("opts.foo; opts.bar; flags.flag;") == set()

    def test_help_flags_rejected(self):
        assert find_flags("args.includes('--help') || args.includes('-h')") == set()

    def test_numeric_property_rejected(self):
        """Properties must start with a letter once dashed."""
        assert find_flags("argv._; argv.0; opts.2fa") == set()


class TestFlagHelpers:
    """Tests for property_to_flag() and is_flag_candidate()."""

    @pytest.mark.parametrize(
        "prop,flag",
        [("f", "-f"), ("force", "--force"), ("dry_run", "--dry_run"), ("--x", "--x")],
    )
    def test_property_to_flag(self, prop, flag):
        assert property_to_flag(prop) == flag

    @pytest.mark.parametrize("flag", ["--", "-", "-1", "---", "--push", "--toString"])
    def test_rejected(self, flag):
        assert is_flag_candidate(flag) is False

    @pytest.mark.parametrize("flag", ["-v", "--verbose", "--dry-run"])
    def test_accepted(self, flag):
        assert is_flag_candidate(flag) is True


class TestFindUsage:
    """Tests for find_usage()."""

    def test_first_usage_line(self):
        text = "console.log(`Usage: tool <cmd>`);\nconsole.log('usage: other');"

        assert find_usage(text) == "tool <cmd>`);"

    def test_case_insensitive(self):
        assert find_usage("// USAGE: widgets build") == "widgets build"

    def test_no_usage(self):
        assert find_usage("console.log('hi')") == ""

    def test_usage_with_nothing_after_it(self):
        """An empty Usage: line is skipped in favour of a later one."""
        assert find_usage("Usage:\nUsage: tool run") == "tool run"


class TestCandidateFiles:
    """Tests for candidate_files()."""

    def test_main_and_bin_deduplicated(self, make_project):
        root = make_project()
        manifest = manifest_from_dict(
            {"main": "cli.js", "bin": {"a": "./cli.js", "b": "bin/b.js"}}, "dir"
        )

        paths = candidate_files(manifest, root)

        assert paths == [(root / "cli.js").resolve(), (root / "bin" / "b.js").resolve()]


class TestScanSources:
    """Tests for scan_sources()."""

    def test_scans_existing_files(self, make_project):
        root = make_project(files={
            "index.js": "case 'build':\nif (opts.force) {}\n// Usage: tool build\n",
            "bin/cli.js": "if (args[0] === 'deploy') {}\n",
        })

        findings = scan_sources([root / "index.js", root / "bin" / "cli.js"])

        assert findings.commands == {"build", "deploy"}
        assert findings.flags == {"--force"}
        assert findings.usage == ["tool build"]
        assert len(findings.files_scanned) == 2

    def test_missing_files_skipped(self, make_project):
        root = make_project()

        findings = scan_sources([root / "nope.js"])

        assert findings.commands == set()
        assert findings.files_scanned == []

    def test_undecodable_file_skipped(self, make_project):
        root = make_project(files={"good.js": "case 'run':"})
        (root / "bad.js").write_bytes(b"\xff\xfe case 'bad':")

        findings = scan_sources([root / "bad.js", root / "good.js"])

        assert findings.commands == {"run"}

    def test_identical_usage_kept_once(self, make_project):
        root = make_project(files={"a.js": "Usage: tool", "b.js": "Usage: tool"})

        findings = scan_sources([root / "a.js", root / "b.js"])

        assert findings.usage == ["tool"]
