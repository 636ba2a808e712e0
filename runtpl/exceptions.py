# runtpl/exceptions.py
class RuntplError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(RuntplError):
    # errors related to configuration.
    pass

class ContextError(RuntplError):
    # errors while building the data context from arguments or files.
    pass

class TemplateError(RuntplError):
    # errors related to templates.
    pass

class TemplateSyntaxError(TemplateError):
    # unbalanced loop tags.
    def __init__(self, message: str, line: int):
        super().__init__(f"{message} (line {line})")
        self.line = line

class TemplateRenderError(TemplateError):
    # errors resolving a template against its context.
    pass

class UnknownFunctionError(TemplateRenderError):
    # a loop source calls a function that is not registered.
    def __init__(self, function_name: str):
        super().__init__(f"Unknown function '{function_name}'")
        self.function_name = function_name

class FunctionCallError(TemplateRenderError):
    # a registered function rejected its arguments or failed.
    def __init__(self, function_name: str, message: str):
        super().__init__(f"Error in function '{function_name}': {message}")
        self.function_name = function_name

class ArgumentError(RuntplError):
    # malformed function-call argument text.
    pass

class FunctionError(RuntplError):
    # raised by builtin functions for invalid or missing arguments.
    pass

class TemplateNotFoundError(TemplateError):
    # no local file or stored template with the given name.
    pass

class TemplateExistsError(TemplateError):
    # a stored template with the given name already exists.
    pass

class EditorError(RuntplError):
    # the external editor could not be launched.
    pass

class OutputError(RuntplError):
    # errors during output operations.
    pass

class InteractiveAbort(RuntplError):
    # the user left the scaffold unchanged; not a failure.
    pass
