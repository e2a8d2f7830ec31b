# Business logic: the note store and the editor state machine
