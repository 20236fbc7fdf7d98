"""
Constants shared across the InsightAI application.
"""

# Label stored in history when only a document photo was analyzed
FALLBACK_INPUT_LABEL = "Document Analysis"

# Text part sent to the model when the user supplied no text
PLACEHOLDER_PROMPT = "Analyze the provided information/image."

# Every image part is sent with this MIME type
IMAGE_MIME_TYPE = "image/jpeg"

# Values that mean "no key configured"
PLACEHOLDER_API_KEYS = {
    "PLACEHOLDER_API_KEY",
    "YOUR_API_KEY",
    "YOUR_GEMINI_API_KEY",
    "your_api_key_here",
    "your-api-key",
    "undefined",
    "null",
    "none",
}

# Error signatures reported by the generative model service
INVALID_KEY_SIGNATURE = "API key not valid"
STALE_KEY_SIGNATURE = "Requested entity was not found"

# Preset prompts shown on the dashboard
QUICK_ACTIONS = [
    {
        "label": "Personal Papers",
        "description": "Bank notices, KYC, ID forms",
        "context": "Personal",
        "text": "Bank notice: KYC pending for account ending in 1234. Needs Aadhaar update.",
    },
    {
        "label": "Career Growth",
        "description": "Resumes, Skill gaps, Interviews",
        "context": "Career",
        "text": "Reviewing my resume for a Senior DevOps position. I know AWS but not Kubernetes.",
    },
    {
        "label": "Business Strategy",
        "description": "Negotiations, Invoices, Risk",
        "context": "Business",
        "text": "Vendor is asking for a 15% price hike on raw materials. How to negotiate?",
    },
]
