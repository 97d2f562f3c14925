"""Screen templates (jinja2, plain text). Each screen has a fixed header and a scrollable body."""

SELECTION_HEAD = """\
Kernel Version Selector    {{ boot_dir }}
Up/Down or j/k to move, Enter to select, q/Esc to quit
"""

SELECTION_BODY = """\
{% for e in entries %}
{{ e.version }}{{ " (current)" if e.version == running else "" }}
{% endfor %}
"""

CONFIRMATION_HEAD = """\
Switch to kernel {{ entry.version }}?
Enter/Y to switch, n/q/Esc to cancel
"""

CONFIRMATION_BODY = """\
Kernel: {{ entry.kernel_path }}
Initrd: {{ entry.initrd_path }}
Command line: inherited from the running kernel

The running system is replaced immediately, without a clean shutdown.
Unsaved work in every process will be lost.
"""

ERROR_HEAD = """\
Error
{{ "Press any key to quit" if fatal else "Press any key to return to the kernel list" }}
"""

ERROR_BODY = """\
{{ message }}
"""

SWITCHING = """\
Loading {{ entry.version }} and switching kernels...
"""

LIST_TEXT = """\
VERSION\tCURRENT\tKERNEL\tINITRD
{% for e in entries %}
{{ e.version }}\t{{ 1 if e.version == running else 0 }}\t{{ e.kernel_path }}\t{{ e.initrd_path }}
{% endfor %}
"""

TEMPLATES = {
    "selection.head": SELECTION_HEAD,
    "selection.body": SELECTION_BODY,
    "confirmation.head": CONFIRMATION_HEAD,
    "confirmation.body": CONFIRMATION_BODY,
    "error.head": ERROR_HEAD,
    "error.body": ERROR_BODY,
    "switching.txt": SWITCHING,
    "list.txt": LIST_TEXT,
}
