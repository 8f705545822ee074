"""Starter .rulekit.toml template."""

DEFAULT_TOML = """\
# rulekit configuration
version = "1.0"

[rules]
dir = ".cursor/rules"          # searched upward from the working directory
categories_dir = "categories"

[validate]
fail_on = "error"              # warning | error; "warning" is the same as --strict
max_line_length = 120
required_fields = ["description"]
recommended_fields = ["globs", "alwaysApply"]

[checks]
# enable = ["TITLE", "PLACEHOLDER"]   # empty = all enabled
# disable = ["TITLE_EMOJI"]

[ignore]
# files = ["drafts/*"]         # globs relative to the rules directory

[output]
format = "terminal"            # terminal | json | sarif
show_summary = true

[install]
target = ".cursor/rules"

[install.labels]
# my-category = "🎯 My Category"

[cli]
install_dir = "~/.local/bin"
shell_config = "~/.zshrc"
tool_name = "copy-cursor-rules"

[ci]
# annotation_format = "github"  # github | none
"""
