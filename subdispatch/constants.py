"""Names shared between the dispatcher and the commands it launches."""

COMMAND_NAME = "typo3cms"

SUB_PROCESS_ENV = "TYPO3_CONSOLE_SUB_PROCESS"
PLUGIN_RUN_ENV = "TYPO3_CONSOLE_PLUGIN_RUN"
ENV_FLAG_VALUE = "true"

INI_PATH_ENV = "PHP_INI_PATH"
INI_PATH_FLAG = "-c"

INTERPRETER_NAMES = ("php",)
INTERPRETER_BINARY_ENV = "PHP_BINARY"

TEST_RUNNER_NAMES = ("pytest", "py.test", "phpunit")

ERROR_WRONG_COMMAND_CONTEXT = 1484945065
ERROR_WRONG_TEST_CONTEXT = 1493570522
ERROR_INTERPRETER_NOT_FOUND = 1485128615
