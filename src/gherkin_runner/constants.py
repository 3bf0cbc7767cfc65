import re

STEP_KEYWORDS = ('Given', 'When', 'Then', 'And', 'But', '*')

PATTERN_STEP = re.compile(r'^\s*(Given|When|Then|And|But|\*)\s+(.*?)\s*$')
PATTERN_SCENARIO_OUTLINE = re.compile(r'^\s*Scenario Outline:\s*(.*?)\s*$')
PATTERN_SCENARIO = re.compile(r'^\s*Scenario:\s*(.*?)\s*$')
# not anchored, a feature declaration is recognized anywhere in the line
PATTERN_FEATURE = re.compile(r'Feature:\s*(.*?)\s*$')
PATTERN_BACKGROUND = re.compile(r'^\s*Background:')
PATTERN_EXAMPLES = re.compile(r'^\s*Examples:\s*(.*?)\s*$')
PATTERN_TABLE_ROW = re.compile(r'^\s*\|.*\|\s*$')

FEATURE_FILE_SUFFIX = '.feature'
STEP_FILE_SUFFIX = '.py'

MARKER_PENDING = 'PENDING'
MARKER_SKIPPED = 'Skipped'
MARKER_UNDEFINED = 'UNDEFINED'

ENV_NO_COLOR = 'GHERKIN_RUNNER_NO_COLOR'
