"""Help text shown by the full-screen help view (``H``)."""

from __future__ import annotations

HELP_TEXT = """\
\033[1;38;5;81mlazyfm\033[0m - terminal file browser

\033[1;38;5;81mMove\033[0m
  \033[38;5;229mj / Down\033[0m     down
  \033[38;5;229mk / Up\033[0m       up
  \033[38;5;229mg\033[0m            top of list
  \033[38;5;229mG\033[0m            bottom of list
  \033[38;5;229ml / Enter\033[0m    open file or enter directory
  \033[38;5;229mh / Left\033[0m     parent directory

\033[1;38;5;81mManage\033[0m
  \033[38;5;229mV\033[0m            visual select (j/k/g/G extend, y yank, D delete, S show, Esc quit)
  \033[38;5;229mc\033[0m            rename item
  \033[38;5;229mm\033[0m            make directory
  \033[38;5;229mD\033[0m            delete item (moves it to the trash)
  \033[38;5;229my\033[0m            yank item
  \033[38;5;229mp\033[0m            paste yanked item(s)
  \033[38;5;229mCtrl+C\033[0m       copy file name to clipboard
  \033[38;5;229mE\033[0m            empty the trash
  \033[38;5;229mt\033[0m            toggle sort by name / modified time

\033[1;38;5;81mPrompts\033[0m
  \033[38;5;229m/\033[0m            filter by name (Enter keep, Esc restore)
  \033[38;5;229m:\033[0m            run a command (:cd PATH, :q quits)
  \033[38;5;229mH\033[0m            this help
  \033[38;5;229mZZ\033[0m           quit
"""

HELP_FOOTER = "Input any key to go back."
