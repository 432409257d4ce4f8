"""Starter .convcheck.toml template."""

DEFAULT_TOML = """\
# convcheck configuration
version = "1.0"

[conventions]
# enable = ["branch", "commit"]   # empty = all enabled
# disable = []

# Custom conventions are appended after the built-ins; reusing an id
# replaces the built-in of that name.
# [[conventions.custom]]
# id = "release-branch"
# name = "Release branch"
# description = "release branches look like release/1.2.3"
# target = "branch"
# pattern = '^release/\\d+\\.\\d+\\.\\d+$'
# checks = [{ pattern = '^release/', message = "missing release/ prefix" }]

[branch]
convention = "branch"
exempt = ["main", "master", "develop"]

[commit]
convention = "commit"
skip_patterns = ['^Merge ', '^Revert "', '^fixup! ', '^squash! ']

[output]
format = "terminal"       # terminal | text | json
show_summary = true
"""
