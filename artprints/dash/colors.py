# ArtPrints brand colors

colors = {
    "terracotta": "#C8553D",
    "ochre": "#E0A458",
    "teal": "#2A9D8F",
    "indigo": "#3D405B",
    "sand": "#F4F1DE",
    "blue": "#4A7FB5",
    "green": "#6A994E",
    "red": "#D62828",
    "black": "#1B1B1E",
}
