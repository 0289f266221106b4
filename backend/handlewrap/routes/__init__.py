# Routes package init
