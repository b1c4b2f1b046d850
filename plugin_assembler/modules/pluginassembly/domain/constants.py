"""Constants shared across the plugin assembly domain."""

PLUGINS_DIR = "plugins"
OMNISHARP_DIR = "omnisharp"
SLOOP_DIR = "sloop"
ESLINT_BRIDGE_DIR = "eslint-bridge"

COLLECTED_DIRS = (PLUGINS_DIR, OMNISHARP_DIR, SLOOP_DIR)

JAVASCRIPT_PLUGIN_PREFIX = "sonar-javascript-plugin-"
JAVASCRIPT_PLUGIN_SUFFIX = ".jar"
ESLINT_BUNDLE_PATTERN = r"sonarjs-.*\.tgz"

STAGE_COPY = "copy"
STAGE_PRUNE = "prune"
STAGE_RENAME = "rename"
STAGE_OMNISHARP = "omnisharp"
STAGE_ESLINT_BRIDGE = "eslint-bridge"
STAGE_SLOOP = "sloop"
STAGE_COLLECT = "collect"
