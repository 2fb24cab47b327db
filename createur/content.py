"""
createur/content.py
Starter quiz catalogue, written to the database by `flask seed`.
Question shape matches Quiz.questions: {id, question, options, correct}.
"""

SAMPLE_QUIZZES = [
    {
        "title": "Quiz: Twitch Basics",
        "questions": [
            {
                "id": 1,
                "question": "What resolution is recommended for streaming on Twitch?",
                "options": ["720p 30fps", "1080p 60fps", "1440p 30fps", "4K 30fps"],
                "correct": 1,
            },
            {
                "id": 2,
                "question": "How many hours must you stream to qualify for Twitch Affiliate?",
                "options": ["2 hours", "4 hours", "7 hours", "10 hours"],
                "correct": 2,
            },
            {
                "id": 3,
                "question": "What is the minimum recommended upload bitrate for a quality stream?",
                "options": ["1 Mbps", "3 Mbps", "5 Mbps", "10 Mbps"],
                "correct": 2,
            },
        ],
    },
    {
        "title": "Quiz: Going Viral on TikTok",
        "questions": [
            {
                "id": 1,
                "question": "What video length tends to maximise engagement on TikTok?",
                "options": ["15-30 seconds", "30-60 seconds", "1-2 minutes", "2-3 minutes"],
                "correct": 1,
            },
            {
                "id": 2,
                "question": "When in the day do posts usually get the most views?",
                "options": ["6am-9am", "12pm-3pm", "6pm-9pm", "10pm-1am"],
                "correct": 2,
            },
        ],
    },
    {
        "title": "Quiz: YouTube Monetisation",
        "questions": [
            {
                "id": 1,
                "question": "How many subscribers do you need to join the YouTube Partner Program?",
                "options": ["100", "500", "1,000", "10,000"],
                "correct": 2,
            },
            {
                "id": 2,
                "question": "How many public watch hours are required over the last 12 months?",
                "options": ["1,000", "2,000", "4,000", "10,000"],
                "correct": 2,
            },
        ],
    },
]
