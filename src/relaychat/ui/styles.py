"""CSS styles for the chat UI.

Hides layout and styling decisions from the application logic.
User bubbles sit on the right, bot bubbles on the left; the compose bar
is docked at the bottom.
"""

APP_CSS = """
Screen {
    background: $background;
}

#conversation {
    height: 1fr;
    padding: 1 2;
    scrollbar-gutter: stable;
}

#empty-state {
    width: 100%;
    margin-top: 4;
    text-align: center;
    color: $text-muted;
}

.bubble {
    width: auto;
    max-width: 75%;
    height: auto;
    margin-bottom: 1;
    padding: 0 2;
}

.bubble .bubble-text {
    width: auto;
}

.user-bubble {
    align-horizontal: right;
    margin-left: 8;
    width: 1fr;
    max-width: 100%;
}

.user-bubble .bubble-text {
    background: $primary 30%;
    border: round $primary;
    padding: 0 1;
}

.user-bubble .retry-btn {
    min-width: 9;
    height: 1;
    border: none;
    margin-top: 0;
    display: none;
}

.user-bubble.-can-retry .retry-btn {
    display: block;
}

.bot-bubble {
    margin-right: 8;
}

.bot-bubble .bubble-text {
    background: $surface;
    border: round $border;
    padding: 0 1;
}

.bot-bubble.-pending .bubble-text {
    color: $text-muted;
    text-style: italic;
}

.bot-bubble.-error .bubble-text {
    border: round $error;
    color: $text-error;
}

#compose-bar {
    dock: bottom;
    height: auto;
    padding: 1 2;
    border-top: solid $border;
}

#compose-input {
    width: 1fr;
    margin-right: 1;
}

#send-btn {
    min-width: 10;
}
"""
