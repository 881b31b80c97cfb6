"""
RunExecutable - Run a RightScript or recipe on instances selected by tag.

Flow of a single call:
1. Normalize tags and options (ConfigError before any request)
2. Resolve the executable to an execute payload (once, not per instance)
3. Find instances by tag
4. run_executable on each instance, then propagate inputs to each update target

Error handling contract:
- No error isolation between instances or update targets
- The first failure aborts the run; remaining instances are not processed
- RightScriptNotFound / ConfigError / HTTP errors propagate unchanged
"""

import logging
from typing import Any, Mapping

from rsmule.config import RunExecutableOptions, normalize_tags
from rsmule.executable import ExecutableKind, UpdateTarget, parse_enum, resolve_kind
from rsmule.lineage import find_right_script_lineage_by_name, right_script_revision_from_lineage
from rsmule.right_api.protocol import ApiResource, RightApi


logger = logging.getLogger(__name__)


def _coerce_options(
    options: RunExecutableOptions | Mapping[str, Any] | None,
    overrides: Mapping[str, Any],
) -> RunExecutableOptions:
    if isinstance(options, RunExecutableOptions):
        if not overrides:
            return options
        options = {
            name: getattr(options, name)
            for name in RunExecutableOptions.__dataclass_fields__
        }
    merged = dict(options or {})
    merged.update(overrides)
    return RunExecutableOptions.from_dict(merged)


class RunExecutable:
    """Runs executables on tagged instances through an authenticated client."""

    def __init__(self, right_api_client: RightApi):
        """
        Args:
            right_api_client: An instantiated and authenticated client which
                will be used for making the request(s)
        """
        self.right_api_client = right_api_client

    def build_execute_params(self, executable: str, options: RunExecutableOptions) -> dict[str, Any]:
        """
        Resolve an executable identifier to the run_executable payload.

        Looks up the RightScript lineage when the executable is a name.

        Returns:
            Dict with right_script_href or recipe_name, plus inputs if any
        """
        kind = resolve_kind(executable, options.executable_type)
        execute_params: dict[str, Any] = {}

        if kind is ExecutableKind.RECIPE_NAME:
            execute_params["recipe_name"] = executable
        elif kind is ExecutableKind.RIGHT_SCRIPT_HREF:
            execute_params["right_script_href"] = executable
        else:
            lineage = find_right_script_lineage_by_name(self.right_api_client, executable)
            right_script = right_script_revision_from_lineage(lineage, options.right_script_revision)
            execute_params["right_script_href"] = right_script.href

        if len(options.inputs) > 0:
            execute_params["inputs"] = options.inputs

        target = execute_params.get("recipe_name") or execute_params["right_script_href"]
        logger.info(f"Resolved {executable} as {kind.value}: {target}")
        return execute_params

    def run_executable(
        self,
        tags: str | list[str],
        executable: str,
        options: RunExecutableOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> list[str]:
        """
        Run a RightScript or Chef recipe on all instances matching the tags.

        Args:
            tags: A tag or list of tags
            executable: RightScript name or href, or the name of a recipe.
                The kind is auto-detected unless options.executable_type
                gives a hint.
            options: RunExecutableOptions, or a mapping of its fields
            **overrides: Individual option fields, applied on top of options

        Returns:
            Hrefs of the instances the executable was run on

        Raises:
            ConfigError: If an option has an unrecognized value or tags is empty
            RightScriptNotFound: If the RightScript lineage does not exist, or
                the requested revision is not available
        """
        options = _coerce_options(options, overrides)
        tags = normalize_tags(tags)

        execute_params = self.build_execute_params(executable, options)

        resources_by_tag = self.right_api_client.by_tag(
            resource_type="instances",
            tags=tags,
            match_all=options.match_all,
        )
        if not resources_by_tag:
            logger.warning(f"No instances matched {options.tag_match_strategy.value} of tags {tags}")

        dispatched = []
        for res in resources_by_tag:
            instance = self.right_api_client.resource(res.links[0]["href"])
            logger.info(f"Running {executable} on {instance.href}")
            instance.run_executable(execute_params)
            for update_type in options.update_inputs:
                self.update_inputs(instance, options.inputs, update_type)
            dispatched.append(instance.href)

        return dispatched

    def update_inputs(self, instance: ApiResource, inputs: dict[str, str], update_type: UpdateTarget | str) -> None:
        """
        Update inputs on the instance or an object related to it.

        Deliberately lacks error handling: if the instance has no deployment
        (or no next instance) the error propagates and the run stops.

        Args:
            instance: Matched instance
            inputs: Input name to Inputs 2.0 value
            update_type: Which object to update
        """
        update_type = parse_enum(UpdateTarget, update_type, "update_inputs")
        logger.debug(f"Updating {update_type.value} inputs for {instance.href}")

        if update_type is UpdateTarget.CURRENT_INSTANCE:
            instance.update_inputs(inputs)
        elif update_type is UpdateTarget.NEXT_INSTANCE:
            instance.follow("parent").follow("next_instance").update_inputs(inputs)
        elif update_type is UpdateTarget.DEPLOYMENT:
            instance.follow("deployment").update_inputs(inputs)
