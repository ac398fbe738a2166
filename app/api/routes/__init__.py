"""
API routes, mounted under /api/v1 by app.main:

- games: schedule, scoring, play-by-play, win probability
- standings: season standings and rankings
- bets: wagers and balance
- users: leaderboard, admin coin and account management
- chat: chat history
- notifications: live/final transition polling
- stats: position stat fields and player stat lines
- news: league news posts
- predictions: fan who-wins votes
- live: the /ws relay
"""
