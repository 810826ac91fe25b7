"""SSM Parameter Store lookups."""

from typing import Dict, List, Optional, Sequence

from aibs_informatics_aws_utils.ssm import get_ssm_client
from aibs_informatics_core.utils.logging import get_logger

from aws_lambda_toolkit.common.config import SSM_GET_PARAMETERS_LIMIT
from aws_lambda_toolkit.common.exceptions import MissingArgumentError

logger = get_logger(__name__)


def get_env_params(region: Optional[str], param_names: Sequence[str]) -> Dict[str, str]:
    """Get SSM parameters as a mapping of parameter name to (decrypted) value.

    Names are requested in batches of 10, the GetParameters limit. Names that
    SSM reports as invalid are logged and left out of the result.

    Args:
        region (Optional[str]): AWS region of the parameter store. Defaults to the current region.
        param_names (Sequence[str]): Parameter names to fetch.

    Raises:
        MissingArgumentError: If no parameter names are given.

    Returns:
        Dict[str, str]: parameter name -> parameter value
    """
    if not param_names:
        raise MissingArgumentError("At least one parameter name is required")

    ssm = get_ssm_client(region=region)
    names: List[str] = list(param_names)
    params: Dict[str, str] = {}
    for i in range(0, len(names), SSM_GET_PARAMETERS_LIMIT):
        response = ssm.get_parameters(
            Names=names[i : i + SSM_GET_PARAMETERS_LIMIT], WithDecryption=True
        )
        for param in response.get("Parameters", []):
            params[param["Name"]] = param["Value"]
        if response.get("InvalidParameters"):
            logger.warning(f"SSM reported invalid parameters: {response['InvalidParameters']}")
    return params
