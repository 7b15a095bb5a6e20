# db/seed.py
"""Fixture content loaded into empty stores at startup."""
import logging

from werkzeug.security import generate_password_hash

from models.schemas import (
    InsertBlogPost,
    InsertProfile,
    InsertProject,
    InsertTimelineEntry,
    InsertUser,
)

logger = logging.getLogger(__name__)

SAMPLE_PROJECTS = [
    {
        "title": "E-Commerce Platform",
        "description": "A full-featured e-commerce platform with product management, shopping cart, "
                       "payment processing, and order tracking.",
        "thumbnail": "https://images.unsplash.com/photo-1557821552-17105176677c?auto=format&fit=crop&w=600&q=80",
        "live_url": "https://ecommerce-platform.example.com",
        "github_url": "https://github.com/alexmorgan/ecommerce-platform",
        "category": "Full-Stack",
        "tech_stack": ["React", "Node.js", "Express", "MongoDB", "Stripe", "Redux"],
        "featured": True,
    },
    {
        "title": "Task Management App",
        "description": "A collaborative task manager with real-time updates, a drag-and-drop board "
                       "and team features built on WebSockets.",
        "thumbnail": "https://images.unsplash.com/photo-1540888747681-4acddd2bbdf4?auto=format&fit=crop&w=600&q=80",
        "live_url": "https://taskmanager.example.com",
        "github_url": "https://github.com/alexmorgan/task-manager",
        "category": "Web Application",
        "tech_stack": ["React", "TypeScript", "Node.js", "Socket.io", "MongoDB"],
        "featured": True,
    },
    {
        "title": "Weather Dashboard",
        "description": "Current conditions and forecasts for multiple locations, with charts of "
                       "historical weather data.",
        "thumbnail": "https://images.unsplash.com/photo-1547628641-0aac13f38532?auto=format&fit=crop&w=600&q=80",
        "live_url": "https://weather-dashboard.example.com",
        "github_url": "https://github.com/alexmorgan/weather-dashboard",
        "category": "Front-End",
        "tech_stack": ["React", "Chart.js", "OpenWeather API", "Axios"],
        "featured": False,
    },
    {
        "title": "Budget Tracker",
        "description": "Personal finance tracking for income, expenses and savings goals, with "
                       "spending insights.",
        "thumbnail": "https://images.unsplash.com/photo-1548199973-03cce0bbc87b?auto=format&fit=crop&w=600&q=80",
        "live_url": None,
        "github_url": "https://github.com/alexmorgan/budget-tracker",
        "category": "Full-Stack",
        "tech_stack": ["React", "Node.js", "Express", "MongoDB", "Chart.js"],
        "featured": False,
    },
]

SAMPLE_BLOG_POSTS = [
    {
        "title": "Building a Scalable Backend",
        "content": "Scalability matters once an application has real users.\n\n"
                   "Split the system along clear boundaries and keep services small.\n\n"
                   "Cache hot reads, index what you query, and measure before optimizing.",
        "thumbnail": "https://images.unsplash.com/photo-1517694712202-14dd9538aa97?auto=format&fit=crop&w=600&q=80",
        "excerpt": "Architectural patterns and performance techniques for backends that grow.",
        "category": "Backend",
    },
    {
        "title": "Creating Accessible Web Applications",
        "content": "Accessibility ensures everyone can use what you build.\n\n"
                   "Start with semantic HTML, then add ARIA attributes only where HTML falls short.\n\n"
                   "Test with a keyboard and a screen reader, and check color contrast.",
        "thumbnail": "https://images.unsplash.com/photo-1499750310107-5fef28a66643?auto=format&fit=crop&w=600&q=80",
        "excerpt": "Semantic HTML, ARIA, keyboard navigation and contrast in practice.",
        "category": "Accessibility",
    },
]

SAMPLE_TIMELINE = [
    {
        "title": "Senior Full-Stack Developer",
        "company": "Tech Innovations Inc.",
        "description": "Leading a team of 5 developers building scalable web applications.",
        "date_range": "2022 - Present",
        "skills": ["React", "Node.js", "Microservices", "Team Leadership", "AWS"],
        "order": 1,
    },
    {
        "title": "Full-Stack Developer",
        "company": "WebSolutions Co.",
        "description": "Built and maintained client projects, integrating third-party APIs and payments.",
        "date_range": "2020 - 2022",
        "skills": ["React", "Node.js", "MongoDB", "RESTful APIs"],
        "order": 2,
    },
    {
        "title": "Front-End Developer",
        "company": "Digital Creations Ltd.",
        "description": "Developed responsive, interactive interfaces alongside the design team.",
        "date_range": "2019 - 2020",
        "skills": ["JavaScript", "React", "CSS3", "Responsive Design"],
        "order": 3,
    },
    {
        "title": "Bachelor of Science in Computer Science",
        "company": "Stanford University",
        "description": "Specialized in Software Engineering and Machine Learning.",
        "date_range": "2016 - 2020",
        "skills": ["Algorithms", "Data Structures", "Machine Learning"],
        "order": 4,
    },
]

SAMPLE_PROFILE = {
    "name": "Alex Morgan",
    "title": "Full-Stack Developer",
    "bio": "I craft robust and scalable web applications using modern technologies.",
    "avatar": "https://images.unsplash.com/photo-1568602471122-7832951cc4c5?auto=format&fit=crop&w=600&q=80",
    "email": "alex.morgan@example.com",
    "location": "San Francisco, CA",
    "resume_url": "/resume.pdf",
    "social_links": {
        "github": "https://github.com/alexmorgan",
        "linkedin": "https://linkedin.com/in/alexmorgan",
        "twitter": "https://twitter.com/alexmorgan",
    },
    "skills": {"React": 95, "JavaScript": 90, "TypeScript": 85, "Node.js": 85, "Python": 75},
}


def seed_storage(storage):
    """Fill every empty collection with sample content. Existing data is left alone."""
    if not storage.get_all_projects():
        # oldest first so the newest-first listing matches the list above
        for item in reversed(SAMPLE_PROJECTS):
            storage.create_project(InsertProject(**item))
    if not storage.get_all_blog_posts():
        for item in reversed(SAMPLE_BLOG_POSTS):
            storage.create_blog_post(InsertBlogPost(**item))
    if not storage.get_all_timeline_entries():
        for item in SAMPLE_TIMELINE:
            storage.create_timeline_entry(InsertTimelineEntry(**item))
    if storage.get_profile() is None:
        storage.upsert_profile(InsertProfile(**SAMPLE_PROFILE))
    logger.info("Storage seeded with sample content")


def ensure_admin(storage, username, password, name=None, email=None):
    """Create the configured admin account unless the username already exists."""
    if not username or not password:
        return None
    existing = storage.get_user_by_username(username)
    if existing is not None:
        return existing
    user = storage.create_user(InsertUser(
        username=username,
        password=generate_password_hash(password),
        name=name or username,
        email=email or "admin@example.com",
        role="admin",
    ))
    logger.info("Created admin account %s", username)
    return user
