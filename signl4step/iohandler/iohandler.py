import copy
import html
import logging

import chevron

from signl4step.contextmanager.contextmanager import ContextManager


class RenderException(Exception):
    def __init__(self, message, missing_keys=None):
        self.missing_keys = missing_keys
        super().__init__(message)


class IOHandler:
    def __init__(self, context_manager: ContextManager):
        self.context_manager = context_manager
        self.logger = logging.getLogger(self.__class__.__name__)

    def _validate_template(self, template):
        # check if inside the mustache is object in the context
        if template.count("}}") != template.count("{{"):
            raise RenderException(
                f"Invalid template - number of }} and {{ does not match {template}"
            )

    def render(self, template, additional_context=None):
        # rendering is only support for strings
        if not isinstance(template, str) or "{{" not in template:
            return template

        self._validate_template(template)

        context = self.context_manager.get_full_context(exclude_providers=True)
        if additional_context:
            context.update(additional_context)

        rendered = chevron.render(template, context)
        self.logger.debug("Rendered template", extra={"template": template})
        # chevron html-escapes values, parameters are sent as-is
        return html.unescape(rendered)

    def render_context(self, context_to_render: dict, additional_context: dict = None):
        """
        Iterates the provider parameters and renders them using the workflow context.
        """
        # Don't modify the original context
        context_to_render = copy.deepcopy(context_to_render)
        for key, value in context_to_render.items():
            if isinstance(value, str):
                context_to_render[key] = self.render(
                    value, additional_context=additional_context
                )
            elif isinstance(value, list):
                context_to_render[key] = self._render_list_context(
                    value, additional_context=additional_context
                )
            elif isinstance(value, dict):
                context_to_render[key] = self.render_context(
                    value, additional_context=additional_context
                )
        return context_to_render

    def _render_list_context(
        self, context_to_render: list, additional_context: dict = None
    ):
        for i in range(0, len(context_to_render)):
            value = context_to_render[i]
            if isinstance(value, str):
                context_to_render[i] = self.render(
                    value, additional_context=additional_context
                )
            if isinstance(value, list):
                context_to_render[i] = self._render_list_context(
                    value, additional_context=additional_context
                )
            if isinstance(value, dict):
                context_to_render[i] = self.render_context(
                    value, additional_context=additional_context
                )
        return context_to_render
