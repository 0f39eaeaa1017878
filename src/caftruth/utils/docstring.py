"""Docstring inheritance utilities."""

import inspect

__all__ = ["inherit_docstring"]

HEADER = "Attributes\n----------\n"


def inherit_docstring(*parents):
    """Prepends the `Attributes` block of parent classes to a class docstring.

    Only handles numpy-style docstrings. Docstrings are dedented before they
    are merged, so the block is found at any indentation level. Parents
    without a docstring or without an `Attributes` block contribute nothing.

    Parameters
    ----------
    *parents : List[object]
        Parent class(es) to inherit attributes from

    Returns
    -------
    callable
        Decorator which returns the class with an updated docstring
    """

    def inherit(obj):
        # Collect the attribute entries of the parents
        entries = ""
        for parent in parents:
            doc = inspect.cleandoc(parent.__doc__ or "")
            if HEADER not in doc:
                continue

            block = doc.split(HEADER, 1)[1]
            lines = []
            for line in block.split("\n"):
                # Stop at the next section, recognized by its underline
                if line.strip() and set(line.strip()) == {"-"}:
                    lines = lines[:-1]
                    break
                lines.append(line)

            entries += "\n".join(lines).rstrip() + "\n"

        if not entries:
            return obj

        # Insert the entries at the top of the attribute block
        doc = inspect.cleandoc(obj.__doc__ or "")
        if HEADER not in doc:
            doc = doc.rstrip() + f"\n\n{HEADER}"

        head, tail = doc.split(HEADER, 1)
        obj.__doc__ = head + HEADER + entries + tail

        return obj

    return inherit
