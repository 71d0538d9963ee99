"""Failure types for the site list refresh.

Each carries an ``error_code`` that the CLI writes into the ``STAGE_FAIL`` log
event. Data problems inside a listing (unknown states, bad numeric cells,
unreachable feeds) are not errors; they become null fields.
"""


class PipelineError(Exception):
    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Bad ``stations.yml``, overlay, or run option such as ``--run-date``."""

    error_code = "CONFIG_ERROR"


class StageError(PipelineError):
    """A stage cannot run: missing intermediate, unreadable input."""

    error_code = "STAGE_ERROR"


class FetchError(StageError):
    """The station archive could not be downloaded or copied."""

    error_code = "FETCH_ERROR"


class ContractError(PipelineError):
    """An output table would break its row contract; nothing is written."""

    error_code = "CONTRACT_ERROR"
