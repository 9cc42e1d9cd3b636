"""OpenAPI document generation from discovery documents."""

from __future__ import annotations

from typing import Any, Sequence

from .async_interface import (
    add_async_endpoints,
    add_async_parameters,
    add_async_schemas,
    add_security_requirement,
)
from .config import GeneratorOptions, OpenAPIVersion
from .discovery import parse_discovery
from .logging import get_logger
from .models import Archive, Discovery, Function, Signature, ValueDescriptor
from .schema.snippets import add_description, add_example, quote
from .schema.translator import ValueTranslator
from .yaml_writer import YamlWriter


class OpenAPIGenerator:
    """Translates discovery documents into OpenAPI YAML documents.

    The generator holds configuration only. Each :meth:`generate` call uses
    its own :class:`YamlWriter`, so one instance can be reused (and shared
    between threads) safely.

    Example::

        discovery = json.loads(Path("discovery.json").read_text())
        spec = OpenAPIGenerator(GeneratorOptions(async_interface=True)).generate(discovery)
    """

    def __init__(self, options: GeneratorOptions | None = None) -> None:
        self.options = options or GeneratorOptions()
        self.logger = get_logger("generator")

    def generate(self, discovery: Any) -> str:
        """Return the OpenAPI document for ``discovery`` as YAML text.

        ``discovery`` is the decoded JSON discovery document (or an already
        parsed :class:`Discovery`). Anything that is not a mapping raises
        :class:`~oasgen.discovery.DiscoveryError` before any output is built.
        """
        model = discovery if isinstance(discovery, Discovery) else parse_discovery(discovery)
        y = YamlWriter()
        self._add_document(y, model)
        self.logger.info(
            "Generated OpenAPI %s document for %d archive(s), %d function(s)",
            self.options.openapi_version.value,
            len(model.archives),
            model.function_count,
        )
        return y.to_string()

    def _add_document(self, y: YamlWriter, discovery: Discovery) -> None:
        options = self.options
        y.write_line(f"openapi: {quote(options.openapi_version.value)}")
        y.write_line("info:")
        y.write_line(f"  title: {quote('API for archives ' + ','.join(discovery.archives) + '.')}")
        y.write_line(f"  version: {quote(options.version)}")
        y.write_line("servers:")
        for server in options.servers:
            y.write_line(f"- url: {quote(server)}")

        if discovery.function_count == 0 and not options.async_interface:
            y.write_line("paths: {}")
        else:
            y.write_line("paths:")
        for archive in discovery.archives.values():
            self.logger.debug(
                "Translating archive '%s' (%d functions, %d typedefs)",
                archive.name,
                len(archive.functions),
                len(archive.typedefs),
            )
            translator = ValueTranslator(y, archive, options)
            for function in archive.functions.values():
                self._add_function(y, translator, archive, function)
        if options.async_interface:
            add_async_endpoints(y, options.openapi_version, oauth=options.oauth.enabled)

        y.write_line("components:")
        y.write_line("  schemas:")
        if options.async_interface:
            add_async_schemas(y, options.openapi_version)
        self._add_shared_schemas(y)
        if options.async_interface:
            y.write_line("  parameters:")
            add_async_parameters(y)
        if options.oauth.enabled:
            self._add_security_scheme(y)

    def _add_function(
        self, y: YamlWriter, translator: ValueTranslator, archive: Archive, function: Function
    ) -> None:
        signature = function.signature
        self.logger.debug(
            "Adding /%s/%s with %d input(s) and %d output(s)",
            archive.name,
            function.name,
            len(signature.inputs),
            len(signature.outputs),
        )
        y.write_line(f"  /{archive.name}/{function.name}:")
        y.write_line("    post:")
        y.push(2)
        y.write_line("tags:")
        y.write_line(f"- {quote(archive.name)}")
        y.write_line(f"summary: {quote(f'{function.name} function in {archive.name} package.')}")
        add_description(y, signature.help)
        y.write_line(f"operationId: {quote(f'post_{archive.name}_{function.name}')}")
        if self.options.oauth.enabled:
            add_security_requirement(y)
        if self.options.async_interface:
            y.write_line("parameters:")
            y.write_line('- $ref: "#/components/parameters/ModeParameter"')
            y.write_line('- $ref: "#/components/parameters/ClientParameter"')
        self._add_request_body(y, translator, signature)
        self._add_responses(y, translator, signature)
        y.pop()

    def _add_request_body(
        self, y: YamlWriter, translator: ValueTranslator, signature: Signature
    ) -> None:
        y.write_line("requestBody:")
        y.write_line("  content:")
        y.write_line("    application/json:")
        y.write_line("      schema:")
        y.write_line('        type: "object"')
        y.write_line("        properties:")
        y.write_line("          rhs:")
        y.push(2)
        self._add_value_array(y, translator, signature.inputs, variadic=signature.has_variadic_input)
        y.pop()
        y.write_line("          nargout:")
        y.write_line('            type: "integer"')
        y.write_line('            format: "int64"')
        y.write_line("            minimum: 0")
        if not signature.has_variadic_output:
            y.write_line(f"            maximum: {len(signature.outputs)}")
        y.write_line("          outputFormat:")
        y.write_line('            $ref: "#/components/schemas/OutputFormat"')
        y.write_line("        required:")
        y.write_line("        - rhs")
        y.write_line("        - nargout")

    def _add_responses(
        self, y: YamlWriter, translator: ValueTranslator, signature: Signature
    ) -> None:
        description = "Function output or error"
        if self.options.async_interface:
            description = "When working in synchronous mode: " + description
        y.write_line("responses:")
        y.write_line('  "200":')
        y.write_line(f"    description: {quote(description)}")
        y.write_line("    content:")
        y.write_line("      application/json:")
        y.write_line("        schema:")
        y.write_line("          oneOf:")
        y.write_line('          - type: "object"')
        y.write_line("            properties:")
        y.write_line("              lhs:")
        y.push(2)
        self._add_value_array(y, translator, signature.outputs, variadic=signature.has_variadic_output)
        y.pop()
        y.write_line('          - $ref: "#/components/schemas/ErrorResponse"')
        if self.options.async_interface:
            y.write_line('  "201":')
            y.write_line('    description: "When working in asynchronous mode: Request created successfully."')
            y.write_line("    content:")
            y.write_line("      application/json:")
            y.write_line("        schema:")
            y.write_line('          $ref: "#/components/schemas/AsyncRequestInfo"')
        y.write_line('  "400":')
        y.write_line('    description: "Invalid request. Possibly request body is invalid JSON."')

    def _add_value_array(
        self,
        y: YamlWriter,
        translator: ValueTranslator,
        descriptors: Sequence[ValueDescriptor],
        *,
        variadic: bool,
    ) -> None:
        """Write a positional array of wrapped values (``rhs`` or ``lhs``).

        3.0.3 has no positional item typing, so the items are declared as an
        alternatives group and the length is bounded separately. 3.1.0 types
        every position through ``prefixItems`` and forbids trailing items.
        A trailing variadic marker lifts the length bound in both versions.
        """
        version = self.options.openapi_version
        y.write_line('type: "array"')
        if not descriptors:
            y.write_line("items: {}" if version is OpenAPIVersion.V3_0_3 else "items: false")
            y.write_line("maxItems: 0")
            return
        if version is OpenAPIVersion.V3_0_3:
            y.write_line("items:")
            y.write_line(f"  {self.options.heterogeneous_array.value}:")
            for descriptor in descriptors:
                y.write_line('  - type: "object"')
                translator.add_value(descriptor)
            y.write_line("minItems: 0")
            if not variadic:
                y.write_line(f"maxItems: {len(descriptors)}")
        else:
            if not variadic:
                y.write_line("items: false")
            y.write_line("prefixItems:")
            for descriptor in descriptors:
                y.write_line('- type: "object"')
                translator.add_value(descriptor)

    def _add_shared_schemas(self, y: YamlWriter) -> None:
        version = self.options.openapi_version
        y.write_line("    ErrorResponse:")
        y.write_line('      type: "object"')
        y.write_line("      properties:")
        y.write_line("        error:")
        y.write_line('          type: "object"')
        y.write_line("          properties:")
        y.write_line("            id:")
        y.write_line('              type: "string"')
        add_example(y, version, quote("myFunction:errorId"))
        y.write_line("            message:")
        y.write_line('              type: "string"')
        add_example(y, version, quote("Some Error Message."))
        y.write_line("            stack:")
        y.write_line('              type: "array"')
        y.write_line("              items:")
        y.write_line('                type: "object"')
        y.write_line("                properties:")
        y.write_line("                  file:")
        y.write_line('                    type: "string"')
        add_example(y, version, quote("myFunction.m"))
        y.write_line("                  name:")
        y.write_line('                    type: "string"')
        add_example(y, version, quote("myFunction"))
        y.write_line("                  line:")
        y.write_line('                    type: "integer"')
        add_example(y, version, "23")
        y.write_line("            type:")
        y.write_line('              type: "string"')
        y.write_line("              enum:")
        y.write_line('              - "matlaberror"')
        y.write_line("    OutputFormat:")
        y.write_line("      description: |")
        y.write_line("        Specify whether the output in the response should be returned")
        y.write_line("        using large or small JSON notation, and whether NaN and Inf should be")
        y.write_line("        represented as a JSON string or object.")
        y.write_line("")
        y.write_line("        If used, set `mode` to `large` for the output to comply with this OpenAPI document.")
        y.write_line('      type: "object"')
        y.write_line("      properties:")
        y.write_line("        mode:")
        y.write_line('          type: "string"')
        y.write_line("          enum:")
        y.write_line('          - "large"')
        y.write_line("        nanInfFormat:")
        y.write_line('          type: "string"')
        y.write_line("          enum:")
        y.write_line('          - "string"')
        y.write_line('          - "object"')

    def _add_security_scheme(self, y: YamlWriter) -> None:
        oauth = self.options.oauth
        y.write_line("  securitySchemes:")
        y.write_line("    oauth2:")
        y.write_line('      type: "oauth2"')
        y.write_line("      flows:")
        y.write_line("        authorizationCode:")
        y.write_line(f"          authorizationUrl: {quote(oauth.authorization_url)}")
        y.write_line(f"          tokenUrl: {quote(oauth.token_url)}")
        y.write_line("          scopes: {}")


__all__ = ["OpenAPIGenerator"]
