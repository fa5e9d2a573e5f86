HELP = (
    "worktally: time your tasks.\n\n"
    "/new - create a task\n"
    "/tasks [tag] - open tasks\n"
    "/done - finished tasks\n"
    "/task &lt;id&gt; - show a task\n"
    "/title, /body &lt;id&gt; &lt;text&gt; - edit text\n"
    "/estimate, /worked &lt;id&gt; &lt;minutes&gt; - edit durations\n"
    "/tag, /untag &lt;id&gt; &lt;tag&gt; - edit tags\n"
    "/delete &lt;id&gt; - delete a task\n"
    "/stats - statistics\n"
    "/stats_json - statistics and series as JSON\n"
    "/cancel - abort the current dialog"
)

ASK_TITLE = "Task title?"
ASK_BODY = "Describe the task."
ASK_ESTIMATE = "Estimated effort in minutes?"
ASK_TAGS = "Tags, comma separated? (send '-' to skip)"
INVALID_MINUTES = "Send a whole, non-negative number of minutes."
NO_TASKS = "No tasks."
NO_FINISHED = "No finished tasks yet."
DELETED = "Task deleted."
CANCELLED = "Cancelled."
