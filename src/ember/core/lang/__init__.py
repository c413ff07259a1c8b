"""
Ember language pipeline: tokenizer, recursive-descent parser and
tree-walking interpreter.

The public entry points are re-exported from the top-level ``ember``
package:

    from ember import interpret

    interpret("{ x = 2; result = x * 21 }")
    # 42.0
"""
