"""
Prompts for the triage pipeline.

All email content interpolated here must already be sanitized.
"""

# =============================================================================
# INTENT CLASSIFICATION PROMPT
# =============================================================================
# Used by IntentClassifier. Output is constrained to IntentDecision.

INTENT_CLASSIFICATION_PROMPT = """You are triaging an inbox. Classify the email below into exactly one intent:

1. reply - the sender asks a question or expects a written response
2. meeting - the sender wants to meet, call, or schedule time
3. archive - informational only (newsletters, receipts, notifications, FYIs)
4. human_review - sensitive, complex, ambiguous, or anything you are unsure about

When in doubt, choose human_review. Acting automatically on a misread email
is worse than asking a human.

Also report your confidence (0 to 1) and the urgency (low, medium, high).

=== EMAIL ===
From: {sender}
Subject: {subject}

{body}
"""

# =============================================================================
# REPLY GENERATION PROMPT
# =============================================================================

REPLY_GENERATION_PROMPT = """You are writing a reply on behalf of {user_email}.

Guidelines:
- Match the tone of the original email; default to a {tone} tone
- Address every question or request clearly and concisely
- Do not invent facts, commitments, prices, or dates
- Do not add a sign-off or signature (it is appended automatically)

=== ORIGINAL EMAIL ===
From: {sender}
Subject: {subject}

{body}
"""

# =============================================================================
# MEETING EXTRACTION PROMPT
# =============================================================================

MEETING_EXTRACTION_PROMPT = """Extract the meeting being requested in this email.

Today is {today} ({timezone}).

Rules:
- title: short and descriptive (e.g. "Q4 budget review")
- attendees: email addresses mentioned besides the sender; the sender is added automatically
- duration_minutes: only if stated or clearly implied; business meetings are usually 30-60 minutes
- window_start / window_end: only if the sender names dates or times, as ISO 8601
- is_virtual: true unless a physical place is named; put the place in location

=== EMAIL ===
From: {sender}
Subject: {subject}

{body}
"""

MEETING_CONFIRMATION_BODY = """Thanks for reaching out. I've scheduled "{title}" for {slot}.

A calendar invitation is on its way{location_note}."""

MEETING_NO_SLOT_BODY = """Thanks for reaching out about "{title}". I couldn't find an open slot
in the requested window, so I'll follow up shortly with some alternatives."""

# =============================================================================
# HUMAN REVIEW PROMPT
# =============================================================================

HUMAN_REVIEW_PROMPT = """Prepare this email for a human reviewer.

It was escalated because: {reason}

Summarize the situation, key decisions or sensitive points, the urgency
(low, medium, high), and the single most useful next step.

=== EMAIL ===
From: {sender}
Subject: {subject}

{body}
"""
