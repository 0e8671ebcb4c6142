import logging

from signl4step.contextmanager.contextmanager import ContextManager
from signl4step.iohandler.iohandler import IOHandler
from signl4step.providers.base.base_provider import BaseProvider
from signl4step.providers.models.execution_item import ExecutionItem


class Step:
    def __init__(
        self,
        context_manager: ContextManager,
        step_id: str,
        provider: BaseProvider,
        provider_parameters: dict,
    ):
        self.step_id = step_id
        self.provider = provider
        self.provider_parameters = provider_parameters or {}
        self.context_manager = context_manager
        self.io_handler = IOHandler(context_manager)
        self.logger = logging.getLogger(__name__)

    @property
    def name(self):
        return self.step_id

    def run(self, items: list[ExecutionItem | dict]) -> list:
        """
        Run the provider once per item, in order.

        List results are flattened into the output and None results are skipped.
        The first failing item aborts the step, the error is re-raised as is.
        """
        output = []
        for index, raw_item in enumerate(items):
            item = ExecutionItem.from_raw(raw_item)
            self.context_manager.set_for_each_context(item)
            try:
                results = self._run_single(item)
            except Exception:
                self.logger.exception(
                    "Failed to run step %s",
                    self.step_id,
                    extra={"step_id": self.step_id, "item_index": index},
                )
                raise

            if isinstance(results, list):
                output.extend(results)
            elif results is not None:
                output.append(results)

        self.context_manager.set_step_context(self.step_id, results=output)
        self.logger.info(
            "Step finished",
            extra={"step_id": self.step_id, "items": len(items), "results": len(output)},
        )
        return output

    def _run_single(self, item: ExecutionItem):
        rendered_parameters = self.io_handler.render_context(self.provider_parameters)
        self.context_manager.set_step_provider_paremeters(
            self.step_id, rendered_parameters
        )
        return self.provider.notify(item=item, **rendered_parameters)
