"""Terminal styles, line-based prompts, pickers, a spinner and a time-entry wizard."""