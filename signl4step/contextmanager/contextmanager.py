import logging

from signl4step.core.logging import WorkflowLoggerAdapter


class ContextManager:
    def __init__(
        self,
        tenant_id,
        workflow_id=None,
        workflow_execution_id=None,
    ):
        self.logger = logging.getLogger(__name__)
        self.logger_adapter = WorkflowLoggerAdapter(
            self.logger, self, tenant_id, workflow_id
        )
        self.workflow_id = workflow_id
        self.workflow_execution_id = workflow_execution_id
        self.tenant_id = tenant_id
        self.steps_context = {}
        self.providers_context = {}
        self.foreach_context = {
            "value": None,
        }
        self.__loggers = {}

    def get_logger(self, name=None):
        if not name:
            return self.logger_adapter

        if name in self.__loggers:
            return self.__loggers[name]

        logger = logging.getLogger(name)
        logger_adapter = WorkflowLoggerAdapter(
            logger,
            self,
            self.tenant_id,
            self.workflow_id,
        )
        self.__loggers[name] = logger_adapter
        return logger_adapter

    def get_full_context(self, exclude_providers=False):
        """
        Gets full context on the workflow

        Usage: context injection used, for example, in iohandler

        Returns:
            dict: dictionary contains all context about this workflow
                  providers - all context about providers (configuration, etc)
                  steps - all context about steps (output, provider parameters)
                  foreach - the item the current step iteration runs on
                  item - the current item, as {"json": ..., "binary": ...}
        """
        item = self.foreach_context.get("value")
        full_context = {
            "steps": self.steps_context,
            "foreach": self.foreach_context,
            "item": item.to_context() if hasattr(item, "to_context") else item,
        }

        if not exclude_providers:
            full_context["providers"] = self.providers_context

        return full_context

    def set_for_each_context(self, value):
        self.foreach_context["value"] = value

    def set_step_provider_paremeters(self, step_id, provider_parameters):
        if step_id not in self.steps_context:
            self.steps_context[step_id] = {
                "provider_parameters": {},
                "results": [],
            }
        self.steps_context[step_id]["provider_parameters"] = provider_parameters

    def set_step_context(self, step_id, results):
        if step_id not in self.steps_context:
            self.steps_context[step_id] = {
                "provider_parameters": {},
                "results": [],
            }

        self.steps_context[step_id]["results"] = results
        # this is an alias to the current step output
        self.steps_context["this"] = self.steps_context[step_id]
