# turtle_dojo/framework/base_interpreter.py
from functools import lru_cache

from lark import Lark, Transformer, v_args

class BaseInterpreter(Transformer):
    def NAME(self, name):
        return name.value

    def STRING(self, s):
        return s[1:-1] # Removes the surrounding quotes

@lru_cache(maxsize=None)
def load_parser(grammar_path: str) -> Lark:
    """Reads a grammar file once and builds an LALR parser for it."""
    with open(grammar_path, 'r') as f:
        grammar = f.read()

    return Lark(grammar, parser='lalr')

def execute_dsl(dsl_text: str, grammar_path: str, interpreter_instance):
    """
    Executes DSL text using a pre-configured interpreter instance.

    Args:
        dsl_text: The string containing the DSL code.
        grammar_path: The file path to the Lark grammar.
        interpreter_instance: An already created instance of an interpreter class.
    """
    parser = load_parser(grammar_path)
    tree = parser.parse(dsl_text)

    transformed_tree = interpreter_instance.transform(tree)

    if hasattr(transformed_tree, 'children') and transformed_tree.children:
        # This handles grammars that might produce a list of results
        return transformed_tree.children[0]
    return transformed_tree
